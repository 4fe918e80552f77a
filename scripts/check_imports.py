import sys
import importlib.util

def check_required_imports(modules: list[str], pip_extras: str|None = None) -> None:
    """Exit with an installation hint if any of the required modules cannot be found"""
    missing_modules = [ module_name for module_name in modules if importlib.util.find_spec(module_name) is None ]

    if missing_modules:
        print(f"Error: Required modules not found: {', '.join(missing_modules)}")
        if pip_extras:
            print(f"Please install the package with `pip install .[{pip_extras}]`")
        else:
            print("Please install the package with `pip install .`")
        sys.exit(1)
