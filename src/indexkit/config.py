"""IndexKitConfig and configuration defaults.

Provides ``IndexKitConfig`` with every tunable parameter of an upload:
server location, batch size, retry budget, index-pattern page sizes and
logging flags.  Supports loading overrides from YAML or JSON files via the
``from_file()`` classmethod.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator


class IndexKitConfig(BaseModel):
    """All tunable parameters for file-upload indexing.

    Override individual values via constructor kwargs or load a complete
    config from a file with ``IndexKitConfig.from_file(path)``.
    """

    # --- Server ---
    base_url: str = "http://localhost:5601"
    api_prefix: str = Field(
        default="/api",
        description="Path prefix of the server's REST API.",
    )
    xsrf_header: str = Field(
        default="kbn-xsrf",
        description="Header sent with every mutating request.",
    )
    headers: dict[str, str] = {}

    # --- Import ---
    chunk_size: int = Field(
        default=10_000,
        ge=1,
        description="Records per bulk import request.",
    )
    import_retries: int = Field(
        default=5,
        ge=1,
        description="Total attempts per batch (initial attempt included).",
    )
    accumulate_doc_count: bool = Field(
        default=False,
        description=(
            "Sum per-batch document counts.  When False the last batch's "
            "count replaces the running value."
        ),
    )
    file_type: str | None = None
    app: str | None = None

    # --- Index Patterns ---
    index_pattern_type: str = "index-pattern"
    pattern_lookup_page_size: int = Field(
        default=1000,
        ge=1,
        description="Stored patterns scanned when resolving a pattern id.",
    )
    pattern_listing_page_size: int = Field(
        default=10_000,
        ge=1,
        description="Stored patterns fetched when listing pattern titles.",
    )

    # --- Backend Resilience ---
    backend_timeout_seconds: float = 30.0

    # --- Logging ---
    log_sample_data: bool = Field(
        default=False,
        description="If True, record contents may appear in logs.",
    )

    @model_validator(mode="after")
    def _normalize_urls(self) -> IndexKitConfig:
        if not self.base_url.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        if self.api_prefix and not self.api_prefix.startswith("/"):
            raise ValueError("api_prefix must start with '/'")
        self.base_url = self.base_url.rstrip("/")
        self.api_prefix = self.api_prefix.rstrip("/")
        return self

    @property
    def api_url(self) -> str:
        """Base URL joined with the API prefix."""
        return f"{self.base_url}{self.api_prefix}"

    @classmethod
    def from_file(cls, path: str) -> IndexKitConfig:
        """Load configuration from a YAML or JSON file.

        File format is detected by extension: ``.yaml`` / ``.yml`` for YAML,
        ``.json`` for JSON.  Any keys present in the file override the
        corresponding defaults; keys not present retain their defaults.

        A file shared with other tools may nest the settings under a
        top-level ``indexkit`` key, e.g. a server config with an
        ``indexkit:`` section next to its own keys.  Only that section is
        read in that case.
        """
        import json as json_mod
        import pathlib

        file_path = pathlib.Path(path)
        if not file_path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        suffix = file_path.suffix.lower()

        if suffix in (".yaml", ".yml"):
            try:
                import yaml  # type: ignore[import-untyped]
            except ImportError as exc:
                raise ImportError(
                    "pyyaml is required to load YAML config files. "
                    "Install it with: pip install 'indexkit[yaml]'"
                ) from exc
            with open(file_path) as fh:
                data = yaml.safe_load(fh)
        elif suffix == ".json":
            with open(file_path) as fh:
                data = json_mod.load(fh)
        else:
            raise ValueError(
                f"Unsupported config file extension '{suffix}'. "
                "Use .yaml, .yml, or .json."
            )

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file {path} must contain a mapping")

        section = data.get("indexkit")
        if isinstance(section, dict):
            data = section

        return cls(**data)
