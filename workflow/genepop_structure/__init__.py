from .config import ConfigError, ConversionSettings, ConverterConfig, load_config
from .converter import ConversionResult, genepop_structure
from .genepop import AlleleWidthError, DelimiterFormatError, GenepopFormatError, read_genepop
from .grouping import GroupingMismatchWarning

__version__ = "0.1.0"

__all__ = [
    "AlleleWidthError",
    "ConfigError",
    "ConversionResult",
    "ConversionSettings",
    "ConverterConfig",
    "DelimiterFormatError",
    "GenepopFormatError",
    "GroupingMismatchWarning",
    "genepop_structure",
    "load_config",
    "read_genepop",
]
