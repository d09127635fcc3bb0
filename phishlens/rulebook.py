"""
Heuristic rule sets: link markers, phishing phrases and score weights.

The built-in defaults can be overridden by a JSON file (see
``PHISHLENS_RULES_FILE``), which is watched and reloaded on change. Example::

    {
      "suspicious_domains": ["bit.ly", "tinyurl.com", "t.co"],
      "link_reasons": {"Shortened URL": ["bit.ly", "tinyurl", "t.co"]},
      "phishing_phrases": {"urgent": 15, "wire transfer": 20},
      "weights": {"suspicious_link": 30, "spf_fail": 25, "dkim_fail": 20},
      "safe_threshold": 20
    }

Keys that are missing keep their default value.
"""
import logging
import threading
from dataclasses import dataclass, field, replace
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple, Union

from phishlens import live_config

log = logging.getLogger("rulebook")


@dataclass(frozen=True)
class HeuristicRules:
    """Immutable snapshot of every list and weight the engine scores with."""
    suspicious_domains: Tuple[str, ...] = ("bit.ly", "tinyurl.com", "suspicious-domain.com")
    link_reasons: Mapping[str, Tuple[str, ...]] = field(default_factory=lambda: {
        "Shortened URL": ("bit.ly", "tinyurl"),
        "Suspicious domain": ("suspicious-domain",),
    })
    insecure_reason: str = "Insecure protocol"
    phishing_phrases: Mapping[str, int] = field(default_factory=lambda: {
        "urgent": 15,
        "verify account": 15,
        "click here immediately": 15,
        "suspended": 15,
        "prize": 15,
        "winner": 15,
    })
    suspicious_link_weight: int = 30
    spf_fail_weight: int = 25
    dkim_fail_weight: int = 20
    safe_threshold: int = 20

    def __post_init__(self):
        # Mappings are stored as private read-only copies
        object.__setattr__(self, "link_reasons", MappingProxyType({label: tuple(markers) for label, markers in self.link_reasons.items()}))
        object.__setattr__(self, "phishing_phrases", MappingProxyType(dict(self.phishing_phrases)))


DEFAULT_RULES = HeuristicRules()

_WEIGHT_FIELDS = {
    "suspicious_link": "suspicious_link_weight",
    "spf_fail": "spf_fail_weight",
    "dkim_fail": "dkim_fail_weight",
}


def _weight(value: Any, name: str) -> Optional[int]:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        log.warning(f"[RULES] Ignoring invalid weight for {name!r}: {value!r}")
        return None
    return value


def _markers(values: Any, name: str) -> Optional[Tuple[str, ...]]:
    if not isinstance(values, (list, tuple)):
        log.warning(f"[RULES] Expected a list for {name!r}, got {type(values).__name__}")
        return None
    return tuple(str(v).strip().lower() for v in values if str(v).strip())


def rules_from_mapping(data: Mapping[str, Any], base: HeuristicRules = DEFAULT_RULES) -> HeuristicRules:
    """Merge a parsed rules document over ``base``; invalid entries are skipped."""
    if not isinstance(data, Mapping):
        log.warning(f"[RULES] Rules document must be an object, got {type(data).__name__}")
        return base

    changes: Dict[str, Any] = {}

    if "suspicious_domains" in data:
        domains = _markers(data["suspicious_domains"], "suspicious_domains")
        if domains is not None:
            changes["suspicious_domains"] = domains

    if "link_reasons" in data:
        raw = data["link_reasons"]
        if isinstance(raw, Mapping):
            reasons = {}
            for label, markers in raw.items():
                parsed = _markers(markers, f"link_reasons.{label}")
                if parsed:
                    reasons[str(label)] = parsed
            changes["link_reasons"] = reasons
        else:
            log.warning("[RULES] 'link_reasons' must be an object")

    if "insecure_reason" in data and str(data["insecure_reason"]).strip():
        changes["insecure_reason"] = str(data["insecure_reason"]).strip()

    if "phishing_phrases" in data:
        raw = data["phishing_phrases"]
        phrases: Dict[str, int] = {}
        if isinstance(raw, Mapping):
            for phrase, weight in raw.items():
                phrase = str(phrase).strip().lower()
                weight = _weight(weight, phrase)
                if phrase and weight is not None:
                    phrases[phrase] = weight
        elif isinstance(raw, (list, tuple)):
            # Bare list of phrases: every phrase gets the default weight
            for phrase in _markers(raw, "phishing_phrases") or ():
                phrases[phrase] = 15
        else:
            log.warning("[RULES] 'phishing_phrases' must be an object or a list")
            phrases = dict(base.phishing_phrases)
        changes["phishing_phrases"] = phrases

    weights = data.get("weights") or {}
    if isinstance(weights, Mapping):
        for key, attr in _WEIGHT_FIELDS.items():
            if key in weights:
                value = _weight(weights[key], key)
                if value is not None:
                    changes[attr] = value

    if "safe_threshold" in data:
        value = _weight(data["safe_threshold"], "safe_threshold")
        if value is not None:
            changes["safe_threshold"] = value

    return replace(base, **changes)


class RuleBook:
    """Serves the current rules, rebuilding them when the rules file changes."""

    def __init__(self, path: Union[str, Path, None] = None, watch: bool = True):
        self.path = Path(path) if path else None
        self._lock = threading.Lock()
        self._rules = DEFAULT_RULES
        if self.path is None:
            return

        try:
            data = live_config.load_file(self.path, watch=watch)
        except (OSError, ValueError) as e:
            log.warning(f"[RULES] Could not load {self.path}, using defaults: {e}")
            data = None
        if data is not None:
            self._apply(data)
        if watch:
            live_config.get_file_cache(self.path, watch=True).add_callback(self._apply)

    def _apply(self, data: Any):
        rules = rules_from_mapping(data)
        with self._lock:
            self._rules = rules
        log.info(
            f"[RULES] Loaded {len(rules.phishing_phrases)} phrases and "
            f"{len(rules.suspicious_domains)} suspicious domains from {self.path}"
        )

    @property
    def rules(self) -> HeuristicRules:
        with self._lock:
            return self._rules


_default_book: Optional[RuleBook] = None
_default_lock = threading.Lock()


def get_rules() -> HeuristicRules:
    """Current rules from the configured rules file, or the built-in defaults."""
    global _default_book
    with _default_lock:
        if _default_book is None:
            from phishlens.heuristics.config import RULES_FILE
            _default_book = RuleBook(RULES_FILE)
        book = _default_book
    return book.rules


__all__ = [
    'HeuristicRules',
    'DEFAULT_RULES',
    'RuleBook',
    'rules_from_mapping',
    'get_rules'
]
