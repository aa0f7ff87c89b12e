"""Extension layer — host UI hooks via pluggy.

Discovery: the svcclient.plugins entry point group, then .svcclient/plugins/*.py.
INVARIANT: Plugin discovery failures are warnings, never errors.
"""

from svcclient.plugins.manager import PluginManager

__all__ = ["PluginManager"]
