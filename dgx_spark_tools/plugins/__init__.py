"""Built-in plugins, loadable by name via ``--plugin``."""
