"""Application wiring: logging, errors, signals and the module table."""

from .module_registry import DEFAULT_MODULES, ModuleDefinition, register_modules

__all__ = ["DEFAULT_MODULES", "ModuleDefinition", "register_modules"]
