"""Table of the blueprint modules mounted by the factory.

Each entry names the blueprint by dotted path so the factory never imports
route modules directly. A module listed in ``DISABLED_MODULES`` is skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from flask import Blueprint, Flask
from werkzeug.utils import import_string


@dataclass(frozen=True)
class ModuleDefinition:
    name: str
    blueprint_path: str  # "package.module:attribute"
    url_prefix: Optional[str] = None

    def resolve(self) -> Blueprint:
        blueprint = import_string(self.blueprint_path)
        if not isinstance(blueprint, Blueprint):
            raise TypeError(
                f"Module '{self.name}': {self.blueprint_path} is a "
                f"{type(blueprint).__name__}, not a Blueprint"
            )
        return blueprint


DEFAULT_MODULES: Sequence[ModuleDefinition] = (
    ModuleDefinition('cases', 'medcase_app.modules.cases.routes:cases_bp', url_prefix='/cases'),
)


def register_modules(app: Flask, modules: Sequence[ModuleDefinition] = DEFAULT_MODULES) -> None:
    disabled = set(app.config.get('DISABLED_MODULES') or ())
    for module in modules:
        if module.name in disabled:
            app.logger.info("Module %s disabled by configuration", module.name)
            continue
        app.register_blueprint(module.resolve(), url_prefix=module.url_prefix)
        app.logger.debug("Module %s mounted at %s", module.name, module.url_prefix or '/')
