"""Parser for the declarative role/permission schema.

The schema is an indentation-structured document::

    permissions:
      PROJECT_MANAGER:          # role heading (2 spaces)
        projects:               # domain heading (4 spaces)
          - Project.create      # permission item (6 or 8 spaces)
          - Project.update      # trailing comments are ignored

The document does not have to be normalized: the same code may appear under
several roles and several times under one role. The first occurrence of a
``(resource, action)`` pair defines the catalog entry, later ones only
reference it.
"""

import logging
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ....core.exceptions import SchemaNotFoundError, SchemaParseError
from ....config.constants import ROLE_VOCABULARY
from ..entities.catalog import CompiledCatalog, SkippedSection
from ..entities.permission import PermissionDefinition, PermissionKey
from .naming import permission_description, permission_name

logger = logging.getLogger(__name__)

SECTION_HEADING = "permissions:"
ROLE_INDENT = 2
DOMAIN_INDENT = 4
ITEM_INDENTS = (6, 8)
DEFAULT_DOMAIN = "general"

_ITEM = re.compile(r"^\s*-\s+(.+?)(?:\s*#.*)?$")


def _indentation(line: str) -> int:
    return len(line) - len(line.lstrip())


def _item_code(stripped: str) -> Optional[str]:
    match = _ITEM.match(stripped)
    if not match:
        return None
    code = match.group(1).split("#")[0].strip()
    return code if code and "." in code else None


def parse_schema(
    text: str,
    role_vocabulary: Iterable[str] = ROLE_VOCABULARY,
) -> CompiledCatalog:
    """Fold schema text into an immutable CompiledCatalog.

    Args:
        text: Schema document
        role_vocabulary: Role headings accepted under ``permissions:``

    Returns:
        CompiledCatalog with roles and permissions in first-seen order
    """
    vocabulary = frozenset(role_vocabulary)

    roles: List[str] = []
    role_permissions: Dict[str, Dict[str, None]] = {}
    definitions: Dict[PermissionKey, PermissionDefinition] = {}
    skipped: List[SkippedSection] = []

    in_section = False
    current_role: Optional[str] = None
    current_domain = DEFAULT_DOMAIN

    for line_number, raw_line in enumerate(text.splitlines(), start=1):
        stripped = raw_line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        indent = _indentation(raw_line)

        if indent == 0:
            # Any other top-level key closes the permissions section
            in_section = stripped == SECTION_HEADING
            current_role = None
            current_domain = DEFAULT_DOMAIN
            continue

        if not in_section:
            continue

        if indent == ROLE_INDENT:
            if not stripped.endswith(":"):
                continue
            heading = stripped[:-1].strip()
            current_domain = DEFAULT_DOMAIN
            if heading in vocabulary:
                current_role = heading
                if heading not in role_permissions:
                    roles.append(heading)
                    role_permissions[heading] = {}
            else:
                current_role = None
                skipped.append(SkippedSection(line_number=line_number, heading=heading))
            continue

        if current_role is None:
            continue

        if indent == DOMAIN_INDENT and stripped.endswith(":") and not stripped.startswith("-"):
            current_domain = stripped[:-1].strip() or DEFAULT_DOMAIN
            continue

        if indent in ITEM_INDENTS:
            code = _item_code(stripped)
            if code is None:
                continue
            role_permissions[current_role].setdefault(code, None)

            resource, _, remainder = code.partition(".")
            action = remainder.split(".")[0]
            if not resource or not action:
                continue
            key = PermissionKey(resource=resource, action=action)
            if key not in definitions:
                definitions[key] = PermissionDefinition(
                    key=key,
                    name=permission_name(resource, action),
                    description=permission_description(resource, action),
                    domain=current_domain,
                )

    catalog = CompiledCatalog(
        roles=tuple(roles),
        role_permissions={role: tuple(codes) for role, codes in role_permissions.items()},
        permissions=tuple(definitions.values()),
        skipped_sections=tuple(skipped),
    )
    logger.info(
        f"Parsed RBAC schema: {len(catalog.roles)} roles, "
        f"{len(catalog.permissions)} permissions, "
        f"{len(catalog.skipped_sections)} skipped sections"
    )
    return catalog


def load_schema_text(path: Union[str, Path]) -> str:
    """Read schema text from disk.

    Raises:
        SchemaNotFoundError: If the file does not exist
        SchemaParseError: If the file cannot be read as UTF-8 text
    """
    schema_path = Path(path)
    if not schema_path.is_file():
        raise SchemaNotFoundError(
            f"RBAC schema file not found: {schema_path}",
            details={"path": str(schema_path)},
        )
    try:
        return schema_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaParseError(
            f"Unable to read RBAC schema {schema_path}: {e}",
            details={"path": str(schema_path)},
        ) from e


def load_schema(
    path: Union[str, Path],
    role_vocabulary: Iterable[str] = ROLE_VOCABULARY,
) -> Tuple[CompiledCatalog, Path]:
    """Read and parse the schema at ``path``."""
    schema_path = Path(path).resolve()
    logger.info(f"Reading RBAC schema from: {schema_path}")
    return parse_schema(load_schema_text(schema_path), role_vocabulary), schema_path
