from __future__ import annotations

import importlib
import importlib.util
import types
import warnings

# Module name -> pip install name, where they differ or are worth stating.
_INSTALL_NAMES = {
    "polars": "polars",
    "tqdm": "tqdm",
    "pyarrow": "pyarrow",
    "scipy": "scipy",
}


def import_optional_dependency(
    name: str,
    extra: str = "",
    errors: str = "raise",
) -> types.ModuleType | None:
    """
    Import an optional dependency.

    Parameters
    ----------
    name : str
        The module name.
    extra : str
        Additional text to include in the ImportError message.
    errors : str {'raise', 'warn', 'ignore'}
        What to do when a dependency is not found:
        - raise : Raise an ImportError.
        - warn : Warn that the dependency is missing and return None.
        - ignore : Return None.

    Returns
    -------
    module or None
    """
    if errors not in ("raise", "warn", "ignore"):
        raise ValueError(f"Invalid value for errors: {errors}")

    package_name = name.split(".")[0]
    install_name = _INSTALL_NAMES.get(package_name, package_name)

    if importlib.util.find_spec(package_name) is None:
        msg = f"Missing optional dependency '{package_name}'. Use pip or conda to install {install_name}."
        if extra:
            msg += f" {extra}"
        if errors == "raise":
            raise ImportError(msg)
        if errors == "warn":
            warnings.warn(msg, UserWarning, stacklevel=2)
        return None

    return importlib.import_module(name)
