"""formtree configuration.

Typed settings for the renderer and the submission consumers. All settings use
Pydantic v2 models so they can be validated at construction time and serialised
to/from JSON or environment variables without boiler-plate.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field


DEFAULT_REF = "_"
N_UNI_SELECT = 4
N_MULTI_SELECT = 4


class Config(BaseModel):
    """Global formtree configuration.

    Instances are typically created once by the CLI entry point and then
    passed to ``FormRenderer``.
    """

    default_ref: str = Field(
        default=DEFAULT_REF, description="Top-level ref used when the page URL has none"
    )
    n_uni_select: int = Field(
        default=N_UNI_SELECT, ge=0, description="Radio group / select list switching threshold"
    )
    n_multi_select: int = Field(
        default=N_MULTI_SELECT, ge=0, description="Checkbox group / select list switching threshold"
    )
    page_url: str = Field(default="http://localhost/", description="URL of the hosting page")
    submit_url: Optional[str] = Field(
        default=None, description="If set, committed forms are POSTed here as JSON"
    )
    submit_timeout: float = Field(default=10.0, gt=0, description="HTTP submit timeout in seconds")

    # ------------------------------------------------------------------
    # Serialisation helpers
    # ------------------------------------------------------------------

    def save(self, path: Path) -> Path:
        """Persist the configuration to a JSON file.

        Args:
            path: Destination file.  Parent directories are created.

        Returns:
            The path where the file was written.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(self.model_dump_json(indent=2), encoding="utf-8")
        return target

    @classmethod
    def load(cls, path: Path) -> "Config":
        """Load a previously-saved configuration from JSON."""
        raw = Path(path).read_text(encoding="utf-8")
        return cls.model_validate_json(raw)

    @classmethod
    def from_env(cls) -> "Config":
        """Build a ``Config`` from environment variables.

        Recognised variables (all optional):
            FORMTREE_DEFAULT_REF, FORMTREE_N_UNI_SELECT, FORMTREE_N_MULTI_SELECT,
            FORMTREE_PAGE_URL, FORMTREE_SUBMIT_URL, FORMTREE_SUBMIT_TIMEOUT.
        """
        kwargs: dict[str, Any] = {}
        if os.environ.get("FORMTREE_DEFAULT_REF"):
            kwargs["default_ref"] = os.environ["FORMTREE_DEFAULT_REF"]
        if os.environ.get("FORMTREE_N_UNI_SELECT"):
            kwargs["n_uni_select"] = int(os.environ["FORMTREE_N_UNI_SELECT"])
        if os.environ.get("FORMTREE_N_MULTI_SELECT"):
            kwargs["n_multi_select"] = int(os.environ["FORMTREE_N_MULTI_SELECT"])
        if os.environ.get("FORMTREE_PAGE_URL"):
            kwargs["page_url"] = os.environ["FORMTREE_PAGE_URL"]
        if os.environ.get("FORMTREE_SUBMIT_URL"):
            kwargs["submit_url"] = os.environ["FORMTREE_SUBMIT_URL"]
        if os.environ.get("FORMTREE_SUBMIT_TIMEOUT"):
            kwargs["submit_timeout"] = float(os.environ["FORMTREE_SUBMIT_TIMEOUT"])
        return cls(**kwargs)
