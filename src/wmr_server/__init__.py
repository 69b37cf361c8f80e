"""WMR server package.

This package loads the startup configuration of the Windows management
REST service: webserver settings, the authentication token, and the list
of functional modules to enable. The token is committed to a bcrypt hash
during validation and the module list is filtered against the modules
registered in the running build.

Usage example:
    from wmr_server.config import load_config_file
    config = load_config_file("config.json")
    print(config.webserver.port, config.modules)

Note: the HTTP handlers and module implementations live outside this
package and only consume the returned configuration.
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
