from .cli import cli

cli(prog_name="neo-access-rbac")
