"""Host plugin registry.

A host supplies the UI side of a service call (blocking overlay, dialogs,
navigation), its cookie store and its login flow as pluggy plugins. They
come from the ``svcclient.plugins`` entry point group or from single-file
modules in a project's ``.svcclient/plugins/`` directory.

INVARIANT: A plugin that fails to load is logged and skipped.
"""

from __future__ import annotations

import importlib.util
import inspect
import logging
from pathlib import Path
from types import ModuleType

import pluggy

from svcclient.plugins.hookspecs import SvcClientHookSpec

PROJECT_NAME = "svcclient"
ENTRY_POINT_GROUP = "svcclient.plugins"
LOCAL_MODULE_PREFIX = "svcclient_local_plugin_"

# Host capability -> hook that provides it.
HOST_CAPABILITIES = {
    "ui_blocking": "block_ui",
    "activity": "requests_started",
    "notifications": "notify_error",
    "dialogs": "alert_dialog",
    "navigation": "navigate",
    "cookies": "get_cookie",
    "login": "handle_not_logged_in",
}

logger = logging.getLogger(__name__)


def _implements_hooks(cls: type) -> bool:
    marker = f"{PROJECT_NAME}_impl"
    return any(hasattr(member, marker) for member in vars(cls).values())


class PluginManager:
    """Holds the host's plugins and relays client hook calls to them."""

    def __init__(self) -> None:
        self._pm = pluggy.PluginManager(PROJECT_NAME)
        self._pm.add_hookspecs(SvcClientHookSpec)

    @property
    def hook(self) -> pluggy.HookRelay:
        return self._pm.hook

    def register_plugin(self, plugin: object, name: str | None = None) -> None:
        """Register *plugin* under *name*; a class is instantiated first."""
        if inspect.isclass(plugin):
            plugin = plugin()
        self._pm.register(plugin, name=name or type(plugin).__name__)

    def discover_and_load(self, *, local_dir: Path | None = None) -> list[str]:
        """Load installed host plugins, then the ones in *local_dir*.

        Returns the names of every registered plugin.
        """
        self._pm.load_setuptools_entrypoints(ENTRY_POINT_GROUP)
        # Entry points name classes; the hooks need bound instances.
        for loaded in [p for p in self._pm.get_plugins() if inspect.isclass(p)]:
            name = self._pm.get_name(loaded) or loaded.__name__
            self._pm.unregister(loaded)
            self._load(loaded, name)

        if local_dir is not None and local_dir.is_dir():
            for path in sorted(local_dir.glob("*.py")):
                if path.name.startswith("_"):
                    continue
                module = _import_file(path)
                if module is None:
                    continue
                for _attr, cls in inspect.getmembers(module, inspect.isclass):
                    if cls.__module__ == module.__name__ and _implements_hooks(cls):
                        self._load(cls, f"{module.__name__}.{cls.__name__}")

        names = self.plugin_names()
        logger.debug("Host plugins: %s", ", ".join(names) or "none")
        return names

    def _load(self, cls: type, name: str) -> None:
        try:
            self.register_plugin(cls, name=name)
        except Exception:
            logger.warning("Skipping host plugin %s", name, exc_info=True)

    def has_impl(self, hook_name: str) -> bool:
        """True when some registered plugin implements *hook_name*."""
        caller = getattr(self._pm.hook, hook_name, None)
        return caller is not None and bool(caller.get_hookimpls())

    def capabilities(self) -> dict[str, bool]:
        """Which host capabilities the registered plugins provide."""
        return {name: self.has_impl(hook) for name, hook in HOST_CAPABILITIES.items()}

    def plugin_names(self) -> list[str]:
        return [self._pm.get_name(plugin) or "" for plugin in self._pm.get_plugins()]


def _import_file(path: Path) -> ModuleType | None:
    spec = importlib.util.spec_from_file_location(LOCAL_MODULE_PREFIX + path.stem, path)
    if spec is None or spec.loader is None:
        logger.warning("Cannot import host plugin file %s", path)
        return None
    module = importlib.util.module_from_spec(spec)
    try:
        spec.loader.exec_module(module)
    except Exception:
        logger.warning("Failed to import host plugin file %s", path, exc_info=True)
        return None
    return module
