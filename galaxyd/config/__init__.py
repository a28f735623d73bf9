from .loader import get_config_path
from .loader import load_config
from .loader import save_example_config
from .models import Config
from .models import DaemonConfig
from .models import MockConfig

__all__ = [
    "Config",
    "DaemonConfig",
    "MockConfig",
    "get_config_path",
    "load_config",
    "save_example_config",
]
