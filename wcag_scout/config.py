"""
Loading and validation of wcag_scout audit settings.
Pydantic describes the schema; files may be YAML or JSON.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, List, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from wcag_scout.crawler.urls import hostname_of, normalize_url

DEFAULT_START_URL = "https://example.com"
START_URL_ENV = "SITE_URL"
DEFAULT_AXE_SOURCE = "https://cdnjs.cloudflare.com/ajax/libs/axe-core/4.10.2/axe.min.js"


class AuditConfig(BaseModel):
    """Settings for one crawl-and-audit run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    start_url: str = Field(
        DEFAULT_START_URL, validate_default=True, description="Root URL or bare hostname of the crawl."
    )
    max_depth: int = Field(1, ge=0, description="Maximum link depth from the root (root is 0).")
    concurrency: int = Field(3, ge=1, description="Number of pages audited at the same time.")
    politeness_delay: float = Field(0.5, ge=0, description="Pause before visiting a discovered link (seconds).")
    page_timeout: float = Field(60.0, gt=0, description="Time budget for loading and auditing one page (seconds).")
    crawl_timeout: Optional[float] = Field(None, gt=0, description="Time budget for the whole crawl (seconds).")
    headless: bool = Field(True, description="Run the browser without a window.")
    user_agent: Optional[str] = Field(None, min_length=1, description="User-Agent override for the browser.")
    wait_until: Literal["load", "domcontentloaded", "networkidle", "commit"] = Field(
        "networkidle", description="Navigation event that marks a page as loaded."
    )
    axe_source: str = Field(DEFAULT_AXE_SOURCE, min_length=1, description="URL or file path of axe.min.js.")
    axe_tags: List[str] = Field(default_factory=list, description="axe-core tags to restrict the run to.")
    axe_fetch_timeout: float = Field(30.0, gt=0, description="Timeout for downloading axe.min.js (seconds).")
    retry_times: int = Field(2, ge=0, description="Retries when downloading axe.min.js.")

    @field_validator("start_url", mode="before")
    @classmethod
    def _normalize_start_url(cls, v: Any) -> Any:
        return normalize_url(v)

    @model_validator(mode="after")
    def _check_axe_file_exists(self) -> AuditConfig:
        source = self.axe_source
        if not source.lower().startswith(("http://", "https://")) and not Path(source).expanduser().is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), source)
        return self

    @property
    def domain(self) -> str:
        """Hostname every followed link must match."""
        return hostname_of(self.start_url) or ""


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Read a YAML or JSON settings file into a plain dict."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> AuditConfig:
    """
    Build a validated :class:`AuditConfig`.

    Values from *path* (YAML or JSON) are applied first, then *overrides*;
    overrides that are ``None`` are ignored so CLI options can be passed
    through unconditionally. Without a file the defaults are used.
    """
    data: dict[str, Any] = read_config_file(path) if path is not None else {}
    data.update({k: v for k, v in overrides.items() if v is not None})
    return AuditConfig(**data)
