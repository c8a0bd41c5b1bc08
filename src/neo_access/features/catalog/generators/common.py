"""Rendering helpers shared by the artifact generators."""

import json

RULE = "# " + "=" * 74
SQL_RULE = "-- " + "=" * 73
GENERATOR_NAME = "neo-access-rbac"


def py_str(value: str) -> str:
    """Render a Python string literal (double-quoted, escaped)."""
    return json.dumps(value, ensure_ascii=False)


def sql_str(value: str) -> str:
    """Render a SQL string literal."""
    return "'" + value.replace("'", "''") + "'"


def module_docstring(title: str, source_name: str) -> str:
    return (
        f'"""{title}.\n\n'
        f"Auto-generated by {GENERATOR_NAME} from {source_name}. Do not edit by hand;\n"
        f"change the schema and regenerate instead.\n"
        f'"""\n'
    )


def section(title: str, indent: str = "") -> str:
    return f"{indent}{RULE}\n{indent}# {title}\n{indent}{RULE}\n"


def module_name(file_name: str) -> str:
    """Import name of a generated module file: ``roles.py`` -> ``roles``."""
    return file_name[:-3] if file_name.endswith(".py") else file_name
