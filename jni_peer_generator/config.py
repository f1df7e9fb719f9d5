"""
Generator configuration and XML settings file parsing
"""

import dataclasses
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from .constants import DEFAULT_INCLUDES, PEER_SUFFIX
from .errors import ModelError
from .literals import IS_WINDOWS


@dataclass(frozen=True)
class GeneratorConfig:
    """Run-wide settings for peer generation"""
    output_dir: str | None = None
    force: bool = False
    namespace: str | None = None  # Overrides the per-class namespace when set
    pch: str | None = None
    verbose: bool = False
    includes: tuple[str, ...] = DEFAULT_INCLUDES
    peer_suffix: str = PEER_SUFFIX
    windows: bool = IS_WINDOWS
    explicit_once_guard: bool = True
    disambiguate_overloads: bool = False
    internal_class_names: bool = False  # Look classes up by FindClass name instead of descriptor
    emit_constants: bool = False

    @property
    def namespace_override(self) -> tuple[str, ...] | None:
        """The override split into segments, or None when not set"""
        if not self.namespace:
            return None
        return split_namespace(self.namespace)

    def replace(self, **changes) -> "GeneratorConfig":
        """Copy of this configuration with some settings changed"""
        return dataclasses.replace(self, **changes)


def split_namespace(namespace: str) -> tuple[str, ...]:
    """Split a dotted namespace (My.Namespace) into its segments"""
    segments = tuple(segment.strip() for segment in namespace.split("."))
    if any(not segment for segment in segments):
        raise ModelError(f"Invalid namespace '{namespace}'")
    return segments


def _parse_bool(element, name: str, default: bool) -> bool:
    value = element.get(name)
    if value is None:
        return default
    value = value.strip().lower()
    if value not in ("true", "false"):
        raise ModelError(f"Attribute '{name}' must be 'true' or 'false', got '{value}'")
    return value == "true"


def parse_config_element(root) -> GeneratorConfig:
    """Read settings from the attributes and <include> children of <peers>"""
    if root.tag != "peers":
        raise ModelError(f"Expected root element 'peers', got '{root.tag}'")

    settings = {}

    # Optional string settings
    for attribute, key in (("output", "output_dir"), ("namespace", "namespace"), ("pch", "pch")):
        value = root.get(attribute)
        if value is not None and value.strip():
            settings[key] = value.strip()

    if settings.get("namespace"):
        split_namespace(settings["namespace"])

    suffix = root.get("suffix")
    if suffix is not None:
        settings["peer_suffix"] = suffix.strip()

    settings["force"] = _parse_bool(root, "force", False)
    settings["verbose"] = _parse_bool(root, "verbose", False)
    settings["explicit_once_guard"] = _parse_bool(root, "once_guard", True)
    settings["disambiguate_overloads"] = _parse_bool(root, "disambiguate_overloads", False)
    settings["internal_class_names"] = _parse_bool(root, "internal_class_names", False)
    settings["emit_constants"] = _parse_bool(root, "constants", False)

    # Header includes replace the defaults when any are given
    includes = []
    for include in root.findall("include"):
        header = include.get("header")
        if not header:
            raise ModelError("Include element missing 'header' attribute")
        includes.append(header.strip())
    if includes:
        settings["includes"] = tuple(includes)

    return GeneratorConfig(**settings)


def parse_config_file(config_path) -> GeneratorConfig:
    """Parse XML configuration file and return GeneratorConfig object"""
    try:
        tree = ET.parse(config_path)
    except ET.ParseError as e:
        raise ModelError(f"XML parsing error: {e}")
    except FileNotFoundError:
        raise FileNotFoundError(f"Configuration file not found: {config_path}")
    return parse_config_element(tree.getroot())
