"""
Wire-shaped records returned by the Black Duck REST API.

These are plain holders: each one lists its attribute-to-JSON-key mapping in
``FIELD_MAP`` and builds itself with ``from_json``. They carry the payload
verbatim (values may be ``None``); the immutable domain aggregates are built
from them by ``dashboard_mapper``.

``from_json`` returns ``None`` when the payload is not a JSON object, which the
API base treats as an undecodable body.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, ClassVar, Dict, List, Optional

logger = logging.getLogger("blackduck-report")


def _read_fields(data: Dict[str, Any], field_map: Dict[str, str]) -> Dict[str, Any]:
    return {attr: data.get(wire_name) for attr, wire_name in field_map.items()}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().lstrip("-").isdigit():
        return int(value)
    return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO-8601 timestamp as sent by Black Duck (``2024-05-01T10:00:00.000Z``)."""
    if not isinstance(value, str) or not value:
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        logger.debug(f"Ignoring unparseable timestamp: {value!r}")
        return None


@dataclass
class ErrorRecord:
    FIELD_MAP: ClassVar[Dict[str, str]] = {
        "log_ref": "logRef",
        "error_message": "errorMessage",
        "error_code": "errorCode",
    }

    log_ref: Optional[str] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> Optional["ErrorRecord"]:
        if not isinstance(data, dict):
            return None
        return cls(**_read_fields(data, cls.FIELD_MAP))


@dataclass
class MetaRecord:
    FIELD_MAP: ClassVar[Dict[str, str]] = {"href": "href"}

    href: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any) -> Optional["MetaRecord"]:
        if not isinstance(data, dict):
            return None
        return cls(**_read_fields(data, cls.FIELD_MAP))


@dataclass
class RiskCounts:
    """Per-severity counters; ``None`` means the server did not send that counter."""

    FIELD_MAP: ClassVar[Dict[str, str]] = {
        "critical": "CRITICAL",
        "high": "HIGH",
        "medium": "MEDIUM",
        "low": "LOW",
        "ok": "OK",
        "unknown": "UNKNOWN",
    }

    critical: Optional[int] = None
    high: Optional[int] = None
    medium: Optional[int] = None
    low: Optional[int] = None
    ok: Optional[int] = None
    unknown: Optional[int] = None

    @classmethod
    def from_category(cls, data: Any) -> Optional["RiskCounts"]:
        """Build from a ``{"CRITICAL": 1, "HIGH": 0, ...}`` mapping (project risk profile)."""
        if not isinstance(data, dict):
            return None
        upper = {str(key).upper(): value for key, value in data.items()}
        return cls(**{attr: _as_int(upper.get(wire)) for attr, wire in cls.FIELD_MAP.items()})

    @classmethod
    def from_counts(cls, data: Any) -> Optional["RiskCounts"]:
        """Build from a ``[{"countType": "CRITICAL", "count": 1}, ...]`` list (component risk profile)."""
        if not isinstance(data, list):
            return None
        category = {}
        for entry in data:
            if isinstance(entry, dict) and entry.get("countType"):
                category[str(entry["countType"]).upper()] = entry.get("count")
        return cls.from_category(category)


@dataclass
class ProjectVersionRecord:
    FIELD_MAP: ClassVar[Dict[str, str]] = {
        "project_name": "projectName",
        "version_name": "versionName",
        "release_phase": "releasePhase",
        "release_distribution": "releaseDistribution",
        "license_name": "licenseName",
        "component_count": "componentCount",
        "parent_project_group_name": "parentProjectGroupName",
    }
    TIMESTAMP_FIELDS: ClassVar[Dict[str, str]] = {
        "last_scan_modified_at": "lastScanModifiedAt",
        "created_at": "createdAt",
        "last_updated_at": "lastUpdatedAt",
    }

    project_name: Optional[str] = None
    version_name: Optional[str] = None
    release_phase: Optional[str] = None
    release_distribution: Optional[str] = None
    license_name: Optional[str] = None
    component_count: Optional[int] = None
    parent_project_group_name: Optional[str] = None
    last_scan_modified_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    last_updated_at: Optional[datetime] = None
    vulnerability_counts: Optional[RiskCounts] = None
    meta: Optional[MetaRecord] = None

    @property
    def href(self) -> Optional[str]:
        return self.meta.href if self.meta else None

    @classmethod
    def from_json(cls, data: Any) -> Optional["ProjectVersionRecord"]:
        if not isinstance(data, dict):
            return None
        values = _read_fields(data, cls.FIELD_MAP)
        values["component_count"] = _as_int(values["component_count"])
        for attr, wire_name in cls.TIMESTAMP_FIELDS.items():
            values[attr] = parse_timestamp(data.get(wire_name))

        categories = _as_dict(_as_dict(data.get("riskProfile")).get("categories"))
        values["vulnerability_counts"] = RiskCounts.from_category(categories.get("VULNERABILITY"))
        values["meta"] = MetaRecord.from_json(data.get("_meta"))
        return cls(**values)


@dataclass
class ComponentRecord:
    FIELD_MAP: ClassVar[Dict[str, str]] = {
        "component_name": "componentName",
        "component_version_name": "componentVersionName",
        "component_href": "component",
        "component_version_href": "componentVersion",
        "component_type": "componentType",
        "review_status": "reviewStatus",
        "approval_status": "approvalStatus",
    }

    component_name: Optional[str] = None
    component_version_name: Optional[str] = None
    component_href: Optional[str] = None
    component_version_href: Optional[str] = None
    component_type: Optional[str] = None
    review_status: Optional[str] = None
    approval_status: Optional[str] = None
    origin_ids: List[str] = field(default_factory=list)
    match_types: List[str] = field(default_factory=list)
    security_counts: Optional[RiskCounts] = None
    meta: Optional[MetaRecord] = None

    @classmethod
    def from_json(cls, data: Any) -> Optional["ComponentRecord"]:
        if not isinstance(data, dict):
            return None
        values = _read_fields(data, cls.FIELD_MAP)

        origins = data.get("origins")
        if not isinstance(origins, list):
            origins = []
        values["origin_ids"] = [
            origin["externalId"] for origin in origins
            if isinstance(origin, dict) and origin.get("externalId")
        ]
        match_types = data.get("matchTypes") or []
        values["match_types"] = [str(m) for m in match_types if m] if isinstance(match_types, list) else []

        values["security_counts"] = RiskCounts.from_counts(_as_dict(data.get("securityRiskProfile")).get("counts"))
        values["meta"] = MetaRecord.from_json(data.get("_meta"))
        return cls(**values)


@dataclass
class PageRecord:
    """One page of a paged list endpoint (``totalCount`` + ``items``)."""

    ITEM_TYPE: ClassVar[Any] = None

    total_count: Optional[int] = None
    items: List[Any] = field(default_factory=list)
    meta: Optional[MetaRecord] = None
    # raw item count, skipped null items included
    received: int = 0

    @classmethod
    def from_json(cls, data: Any):
        if not isinstance(data, dict):
            return None
        raw_items = data.get("items")
        items = []
        received = 0
        if isinstance(raw_items, list):
            received = len(raw_items)
            for raw_item in raw_items:
                item = cls.ITEM_TYPE.from_json(raw_item)
                if item is None:
                    logger.debug(f"Skipping {cls.__name__} item without a body: {raw_item!r}")
                    continue
                items.append(item)
        return cls(
            total_count=_as_int(data.get("totalCount")),
            items=items,
            meta=MetaRecord.from_json(data.get("_meta")),
            received=received,
        )


@dataclass
class ProjectVersionPage(PageRecord):
    ITEM_TYPE: ClassVar[Any] = ProjectVersionRecord


@dataclass
class ComponentPage(PageRecord):
    ITEM_TYPE: ClassVar[Any] = ComponentRecord
