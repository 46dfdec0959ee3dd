"""Compiler configuration and the ``wirebind.config.py`` loader."""

import importlib.util
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, Mapping

if TYPE_CHECKING:
    from wirebind.compiler.properties import ValueKind

DEFAULT_CONFIG_FILENAME = "wirebind.config.py"


@dataclass(frozen=True)
class CompilerConfig:
    """Options for one compilation of an attribute list.

    ``line``/``column`` locate the list inside its template so diagnostics
    point at the template. ``cell_kinds`` maps template names to the kind of
    reactive cell they hold and enables static checks on ``bind:``.
    """

    element_name: str = "_el"
    runtime_alias: str = "_wb"
    function_name: str = "bind_attributes"
    file_path: str = ""
    line: int = 1
    column: int = 0
    cell_kinds: Mapping[str, "ValueKind"] = field(default_factory=dict)

    def __post_init__(self) -> None:
        from wirebind.compiler.properties import ValueKind

        kinds = {name: ValueKind.coerce(kind) for name, kind in dict(self.cell_kinds).items()}
        object.__setattr__(self, "cell_kinds", kinds)
        for label, ident in (
            ("element_name", self.element_name),
            ("runtime_alias", self.runtime_alias),
            ("function_name", self.function_name),
        ):
            if not ident.isidentifier():
                raise ValueError(f"{label} must be a Python identifier, got {ident!r}")

        names = (self.element_name, self.runtime_alias, self.function_name)
        if len(set(names)) != len(names):
            raise ValueError(
                "element_name, runtime_alias and function_name must be distinct, "
                f"got {names!r}"
            )
        # Generated locals and closure parameters are named <runtime_alias>_*
        reserved = f"{self.runtime_alias}_"
        for label, ident in (
            ("element_name", self.element_name),
            ("function_name", self.function_name),
        ):
            if ident.startswith(reserved):
                raise ValueError(
                    f"{label} {ident!r} clashes with generated names starting with {reserved!r}"
                )

    def with_location(self, file_path: str = "", line: int = 1, column: int = 0) -> "CompilerConfig":
        return replace(self, file_path=file_path, line=line, column=column)

    def cache_key(self) -> tuple:
        return (
            self.element_name,
            self.runtime_alias,
            self.function_name,
            self.file_path,
            self.line,
            self.column,
            tuple(sorted((k, v.value) for k, v in self.cell_kinds.items())),
        )


def load_config(path: Path | str | None = None) -> Dict[str, Any]:
    """
    Load configuration from a python file.

    If path is provided, loads from there.
    Otherwise, looks for wirebind.config.py in the current working directory.

    Returns the CompilerConfig keyword arguments mapped from the uppercase
    variables found in the config module.
    """
    if path is None:
        path = Path.cwd() / DEFAULT_CONFIG_FILENAME
    else:
        path = Path(path)

    if not path.exists():
        return {}

    spec = importlib.util.spec_from_file_location("wirebind_config", path)
    if spec is None or spec.loader is None:
        return {}

    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    config = {key: getattr(module, key) for key in dir(module) if key.isupper()}

    # ELEMENT_NAME -> element_name, CELL_KINDS -> cell_kinds, ...
    mapped_config: Dict[str, Any] = {}
    if "ELEMENT_NAME" in config:
        mapped_config["element_name"] = config["ELEMENT_NAME"]
    if "RUNTIME_ALIAS" in config:
        mapped_config["runtime_alias"] = config["RUNTIME_ALIAS"]
    if "FUNCTION_NAME" in config:
        mapped_config["function_name"] = config["FUNCTION_NAME"]
    if "CELL_KINDS" in config:
        mapped_config["cell_kinds"] = dict(config["CELL_KINDS"])

    return mapped_config
