"""Server handler: dispatches JSON-lines requests to the grading engine."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Optional

from flavorquiz.config.settings import ComparisonOptions, Settings
from flavorquiz.engine.comparator import (
    ComparisonResult,
    compare,
    compare_with_hierarchical_category,
)
from flavorquiz.engine.evaluator import Evaluator
from flavorquiz.engine.feedback import format_feedback
from flavorquiz.engine.tables import get_flavor_distinctions, get_spelling_variations
from flavorquiz.engine.taxonomy import ProductCategoryEntry, detect_level

from .protocol import Method, Notification

_OPTION_KEYS = {
    "perfectThreshold": "perfect_threshold",
    "closeThreshold": "close_threshold",
    "acceptThreshold": "accept_threshold",
    "strictFlavors": "strict_flavors",
    "logDetails": "log_details",
}


def _result_to_dict(result: ComparisonResult) -> dict:
    """Serialize a ComparisonResult to a JSON-friendly dict."""
    d = {
        "status": result.status.value,
        "similarity": result.similarity,
        "feedback": result.feedback,
        "award": result.award,
        "display": format_feedback(result).render(),
    }
    if result.match is not None:
        d["matchType"] = result.match_type.value
        d["xpMultiplier"] = result.xp_multiplier
        if result.matched_level is not None:
            d["matchedLevel"] = result.matched_level.value
            d["sharedCategories"] = list(result.shared_categories)
    return d


def _require(params: dict, key: str):
    if key not in params:
        raise ValueError(f"Missing parameter: {key}")
    return params[key]


class ServerHandler:
    """Routes incoming requests to engine functions and returns result dicts."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        write_notification: Optional[Callable[[Notification], None]] = None,
    ):
        self.settings = settings or Settings.load()
        self._write_notification = write_notification or (lambda n: None)
        self.evaluator = Evaluator(settings=self.settings)

    async def dispatch(self, msg: dict) -> dict:
        """Route a request message to the appropriate handler method."""
        method = msg.get("method", "")
        params = msg.get("params") or {}

        handler_map = {
            Method.COMPARE: self._compare,
            Method.COMPARE_REVERSE: self._compare_reverse,
            Method.DETECT_LEVEL: self._detect_level,
            Method.LOAD_TAXONOMY: self._load_taxonomy,
            Method.GET_FLAVORS: self._get_flavors,
            Method.GET_VARIATIONS: self._get_variations,
        }

        handler = handler_map.get(method)
        if handler is None:
            raise ValueError(f"Unknown method: {method}")

        return await handler(params)

    def _options(self, params: dict) -> ComparisonOptions:
        overrides = {
            _OPTION_KEYS[k]: v for k, v in (params.get("options") or {}).items() if k in _OPTION_KEYS
        }
        if not overrides:
            return self.settings.comparison
        return ComparisonOptions(**{**self.settings.comparison.model_dump(), **overrides})

    async def _compare(self, params: dict) -> dict:
        result = compare(
            params.get("userAnswer", ""),
            _require(params, "correctAnswer"),
            self._options(params),
        )
        return _result_to_dict(result)

    async def _compare_reverse(self, params: dict) -> dict:
        if "productDatabase" in params:
            raw = params["productDatabase"]
            database = None if raw is None else [ProductCategoryEntry.from_dict(e) for e in raw]
        else:
            database = self.evaluator.database

        result = compare_with_hierarchical_category(
            params.get("userAnswer", ""),
            _require(params, "expectedAnswer"),
            params.get("question", ""),
            database,
            self._options(params),
        )
        return _result_to_dict(result)

    async def _detect_level(self, params: dict) -> dict:
        return {"level": detect_level(params.get("question", "")).value}

    async def _load_taxonomy(self, params: dict) -> dict:
        path = Path(_require(params, "path"))
        entries = self.evaluator.load_taxonomy(path)
        self._write_notification(
            Notification("taxonomyLoaded", {"path": str(path), "count": len(entries)})
        )
        return {"count": len(entries)}

    async def _get_flavors(self, params: dict) -> dict:
        return {
            "flavors": {
                name: {"forbidden": list(rule.forbidden), "aliases": list(rule.aliases)}
                for name, rule in get_flavor_distinctions().items()
            }
        }

    async def _get_variations(self, params: dict) -> dict:
        return {"variations": get_spelling_variations()}
