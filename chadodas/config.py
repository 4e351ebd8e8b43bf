import enum
from typing import Union
from . import utils, dbutils
from .io.iobase import ConfigurationError


class AssemblyMode(enum.Enum):
    """Mutually exclusive ways of composing features from their location rows"""
    STANDARD = "standard"
    RECURSIVE_MAPPING = "recursive_mapping"
    TWO_LEVEL = "two_level"
    INFER_CDS = "infer_cds"


class AdaptorConfig:
    """Session-wide options of the Chado adaptor, as supplied by the host application"""

    def __init__(self, organism=None, reference_class=None, srcfeatureslice=True, recursive_mapping=False,
                 do_two_level=False, infer_cds=False, allow_obsolete=False, fulltext=False, tripal=False,
                 summary_bin_size=1000, default_bins=1000):
        """Constructor - validates flag combinations and derives the assembly mode"""
        self.organism = str(organism) if organism else None                     # type: Union[None, str]
        self.reference_class = str(reference_class) if reference_class else None  # type: Union[None, str]
        self.srcfeatureslice = bool(srcfeatureslice)
        self.allow_obsolete = bool(allow_obsolete)
        self.fulltext = bool(fulltext)
        self.tripal = bool(tripal)
        self.summary_bin_size = int(summary_bin_size)
        self.default_bins = int(default_bins)
        self.notices = []
        self.assembly_mode = self._select_assembly_mode(bool(recursive_mapping), bool(do_two_level), bool(infer_cds))
        if self.summary_bin_size <= 0 or self.default_bins <= 0:
            raise ConfigurationError("Bin sizes and counts must be positive integers")

    def __repr__(self):
        return "<config.AdaptorConfig(organism='{0}', reference_class='{1}', assembly_mode={2}, " \
               "srcfeatureslice={3}, allow_obsolete={4}, fulltext={5}, tripal={6})>"\
            .format(self.organism, self.reference_class, self.assembly_mode.value, self.srcfeatureslice,
                    self.allow_obsolete, self.fulltext, self.tripal)

    def _select_assembly_mode(self, recursive_mapping: bool, do_two_level: bool, infer_cds: bool) -> AssemblyMode:
        """Folds the assembly flags into a single mode, rejecting unsupported combinations"""
        if recursive_mapping and do_two_level:
            raise ConfigurationError("Recursive mapping cannot be combined with two-level fetching")
        if do_two_level and infer_cds:
            raise ConfigurationError("CDS inference cannot be combined with two-level fetching")
        if recursive_mapping and infer_cds:
            self.notices.append("Both recursive mapping and CDS inference requested; recursive mapping takes "
                                "precedence and no CDS features are inferred")
            return AssemblyMode.RECURSIVE_MAPPING
        if recursive_mapping:
            return AssemblyMode.RECURSIVE_MAPPING
        if do_two_level:
            return AssemblyMode.TWO_LEVEL
        if infer_cds:
            return AssemblyMode.INFER_CDS
        return AssemblyMode.STANDARD

    @property
    def recursive_mapping(self) -> bool:
        return self.assembly_mode == AssemblyMode.RECURSIVE_MAPPING

    @property
    def infer_cds(self) -> bool:
        return self.assembly_mode == AssemblyMode.INFER_CDS

    @property
    def do_two_level(self) -> bool:
        return self.assembly_mode == AssemblyMode.TWO_LEVEL


def option_names() -> list:
    """Lists the options understood by AdaptorConfig"""
    return ["organism", "reference_class", "srcfeatureslice", "recursive_mapping", "do_two_level", "infer_cds",
            "allow_obsolete", "fulltext", "tripal", "summary_bin_size", "default_bins"]


def load_config(filename: str, **overrides) -> AdaptorConfig:
    """Reads adaptor options from the packaged defaults, an optional YAML file and keyword overrides"""
    options = parse_options(dbutils.default_adaptor_file())
    if filename:
        options.update(parse_options(filename))
    for key, value in overrides.items():
        if value is not None:
            options[key] = value
    unknown = [key for key in options if key not in option_names()]
    if unknown:
        raise ConfigurationError("Unknown adaptor option(s): " + ", ".join(sorted(unknown)))
    return AdaptorConfig(**options)


def parse_options(filename: str) -> dict:
    """Parses a YAML file of adaptor options, converting strings to numbers and booleans"""
    options = {}
    for key, value in utils.parse_yaml(filename).items():
        if value is not None and value != "":
            options[key] = utils.parse_string(value)
    return options
