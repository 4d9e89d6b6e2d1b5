"""
groot — one project root per process.

The public API is re-exported here:

    import groot

    groot.set_root("app.id", "dev.env")
    config = groot.from_root("config", "settings.yml")
"""

__version__ = "0.1.0"

from groot.core.context import (  # noqa: E402
    DEFAULT_ROOT_KEY,
    RootContext,
    clear_root,
    default_context,
    get_root,
    get_root_key,
    must_get_root,
    set_root_key,
)
from groot.core.errors import (  # noqa: E402
    BadEnvsDefinedError,
    ConfigError,
    EmptyInputError,
    EntryFileNotFoundError,
    EnvLoadError,
    GrootError,
    MissingEnvsError,
    NoEnvDefinedError,
    NoGitRootFoundError,
    NoRootFoundError,
    ProjectDirUnresolvableError,
    RootNotADirectoryError,
    RootNotSetError,
)
from groot.core.paths import ancestors_of, filter_filenames, normalize  # noqa: E402
from groot.core.services.accessors import (  # noqa: E402
    SKIP_DIR,
    STOP,
    from_root,
    is_in_root,
    is_root,
    list_files_from_root,
    relative_to_root,
    root_info,
    root_name,
    root_parent,
    validate_root,
    walk_from_root,
)
from groot.core.services.execution import (  # noqa: E402
    ExecutionEnvironment,
    get_entry_file,
    get_project_dir,
    is_temporary,
)
from groot.core.services.resolver import (  # noqa: E402
    ResolutionResult,
    find_git_root_from,
    set_root,
    set_root_from_env,
    set_root_from_git,
    set_root_from_path,
    set_root_no_env,
)

__all__ = [
    "__version__",
    # context.py
    "DEFAULT_ROOT_KEY",
    "RootContext",
    "clear_root",
    "default_context",
    "get_root",
    "get_root_key",
    "must_get_root",
    "set_root_key",
    # errors.py
    "BadEnvsDefinedError",
    "ConfigError",
    "EmptyInputError",
    "EntryFileNotFoundError",
    "EnvLoadError",
    "GrootError",
    "MissingEnvsError",
    "NoEnvDefinedError",
    "NoGitRootFoundError",
    "NoRootFoundError",
    "ProjectDirUnresolvableError",
    "RootNotADirectoryError",
    "RootNotSetError",
    # paths.py
    "ancestors_of",
    "filter_filenames",
    "normalize",
    # services/accessors.py
    "SKIP_DIR",
    "STOP",
    "from_root",
    "is_in_root",
    "is_root",
    "list_files_from_root",
    "relative_to_root",
    "root_info",
    "root_name",
    "root_parent",
    "validate_root",
    "walk_from_root",
    # services/execution.py
    "ExecutionEnvironment",
    "get_entry_file",
    "get_project_dir",
    "is_temporary",
    # services/resolver.py
    "ResolutionResult",
    "find_git_root_from",
    "set_root",
    "set_root_from_env",
    "set_root_from_git",
    "set_root_from_path",
    "set_root_no_env",
]
