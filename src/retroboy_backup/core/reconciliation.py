"""Backup reconciliation: turn a raw backup snapshot into import options.

A snapshot is the flat key/value mapping found in a backup file. Most of it
may be unrelated data, so every entry is classified and only those matching
the storage conventions are offered for import:

    settings        JSON object holding general settings (controls, cheats)
    POKEMON         base64 cartridge RAM, keyed by an upper case title
    POKEMON-rtc     optional JSON real-time-clock data for POKEMON

RTC companions are never offered on their own; they are folded into the
option of the cartridge they belong to.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Mapping, NamedTuple, Optional

from .validators import is_upper_case_identifier, is_valid_base64, is_valid_json_object
from ..logging_config import get_logger

logger = get_logger("reconciliation")

SETTINGS_KEY = "settings"
RTC_SUFFIX = "rtc"
RTC_COMPANION_SUFFIX = "-rtc"

GENERAL_SETTINGS_LABEL = "General Settings (Controls/Cheats)"


class ClassificationKind(Enum):
    """What a snapshot entry represents"""
    GENERAL_SETTINGS = "general_settings"
    CARTRIDGE_DATA = "cartridge_data"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True)
class Classification:
    """Result of classifying one snapshot entry.

    has_rtc is only meaningful for cartridge data.
    """
    kind: ClassificationKind
    has_rtc: bool = False

    @property
    def importable(self) -> bool:
        return self.kind is not ClassificationKind.UNCLASSIFIED

    def label_for(self, key: str) -> Optional[str]:
        """Build the user-facing label for an entry with this classification.

        Args:
            key: The snapshot key that was classified

        Returns:
            Display label, or None if the entry is not importable
        """
        if self.kind is ClassificationKind.GENERAL_SETTINGS:
            return GENERAL_SETTINGS_LABEL
        if self.kind is ClassificationKind.CARTRIDGE_DATA:
            if self.has_rtc:
                return f"{key} Cartridge RAM/RTC settings"
            return f"{key} Cartridge RAM"
        return None


GENERAL_SETTINGS = Classification(ClassificationKind.GENERAL_SETTINGS)
UNCLASSIFIED = Classification(ClassificationKind.UNCLASSIFIED)


class ImportOption(NamedTuple):
    """One selectable entry of a backup import"""
    key: str
    label: str


def rtc_key_for(key: str) -> str:
    """Get the key of the RTC companion for a cartridge key."""
    return f"{key}{RTC_COMPANION_SUFFIX}"


def is_rtc_key(key: str) -> bool:
    """Check whether a key is excluded from standalone classification."""
    return key.endswith(RTC_SUFFIX)


# A rule returns a classification when it matches, None to defer to the next rule
ClassificationRule = Callable[[str, object, Mapping[str, object]], Optional[Classification]]


def _general_settings_rule(key: str, value: object, companions: Mapping[str, object]) -> Optional[Classification]:
    if key == SETTINGS_KEY and is_valid_json_object(value):
        return GENERAL_SETTINGS
    return None


def _cartridge_data_rule(key: str, value: object, companions: Mapping[str, object]) -> Optional[Classification]:
    if key == SETTINGS_KEY:
        return None
    if not (is_upper_case_identifier(key) and is_valid_base64(value)):
        return None

    rtc_key = rtc_key_for(key)
    has_rtc = rtc_key in companions and is_valid_json_object(companions[rtc_key])
    return Classification(ClassificationKind.CARTRIDGE_DATA, has_rtc=has_rtc)


# Evaluated in order; the first match wins
CLASSIFICATION_RULES: tuple[ClassificationRule, ...] = (
    _general_settings_rule,
    _cartridge_data_rule,
)


def collect_rtc_companions(snapshot: Mapping[str, object]) -> dict[str, object]:
    """First pass: gather every RTC-suffixed entry for constant time lookup.

    Args:
        snapshot: Raw backup key/value mapping

    Returns:
        Mapping of RTC-suffixed keys to their raw values
    """
    return {key: value for key, value in snapshot.items() if is_rtc_key(key)}


def classify_entry(
    key: str,
    value: object,
    companions: Mapping[str, object],
) -> Classification:
    """Classify a single snapshot entry.

    Args:
        key: Snapshot key
        value: Raw snapshot value
        companions: RTC-suffixed entries of the same snapshot

    Returns:
        The first matching classification, or UNCLASSIFIED
    """
    if is_rtc_key(key):
        return UNCLASSIFIED

    for rule in CLASSIFICATION_RULES:
        classification = rule(key, value, companions)
        if classification is not None:
            return classification
    return UNCLASSIFIED


def build_import_options(snapshot: Mapping[str, object]) -> dict[str, str]:
    """Classify every entry and map each importable key to its label.

    Args:
        snapshot: Raw backup key/value mapping

    Returns:
        Dictionary of key to display label, one entry per importable key
    """
    companions = collect_rtc_companions(snapshot)
    options: dict[str, str] = {}

    for key, value in snapshot.items():
        if not isinstance(key, str) or key in companions:
            continue
        label = classify_entry(key, value, companions).label_for(key)
        if label is not None:
            options[key] = label

    return options


def _option_sort_key(option: ImportOption) -> tuple[str, str]:
    return option.key.casefold(), option.key


def sort_import_options(options: Mapping[str, str]) -> list[ImportOption]:
    """Order import options for display.

    General settings always come first, everything else follows in
    case-insensitive key order.

    Args:
        options: Key to label mapping from build_import_options

    Returns:
        Ordered list of ImportOption
    """
    others = sorted(
        (ImportOption(key, label) for key, label in options.items() if key != SETTINGS_KEY),
        key=_option_sort_key,
    )
    if SETTINGS_KEY in options:
        return [ImportOption(SETTINGS_KEY, options[SETTINGS_KEY]), *others]
    return others


def reconcile(snapshot: Mapping[str, object]) -> list[ImportOption]:
    """Produce the ordered list of importable groups for a backup snapshot.

    The snapshot is never modified and the result depends only on its
    contents, so calling this twice gives the same list.

    Args:
        snapshot: Raw backup key/value mapping

    Returns:
        Ordered list of ImportOption, empty if nothing can be imported
    """
    options = sort_import_options(build_import_options(snapshot))
    logger.debug(f"Reconciled {len(snapshot)} backup entries into {len(options)} import options")
    return options
