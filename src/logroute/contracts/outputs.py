"""Destination (output) models.

An output pairs an identity with at most one destination payload:

    namespace: default
    name: test-syslog-out
    syslog:
      host: test.local
      transport: tcp

Optional options are None when absent and are left out of the rendered
block entirely. No defaults are substituted at this layer.
"""

from __future__ import annotations

from pydantic import Field, model_validator

from logroute.contracts.base import ResourceModel
from logroute.contracts.secrets import SecretRef

# =============================================================================
# Shared option groups
# =============================================================================


class TLSOptions(ResourceModel):
    """TLS material and verification settings."""

    ca_dir: SecretRef | None = None
    ca_file: SecretRef | None = None
    cert_file: SecretRef | None = None
    key_file: SecretRef | None = None
    peer_verify: bool | None = None
    use_system_cert_store: bool | None = None
    cipher_suite: str | None = None
    ssl_version: str | None = None


class DiskBuffer(ResourceModel):
    """Disk-backed queue for a destination."""

    reliable: bool
    compaction: bool | None = None
    dir: str | None = None
    disk_buf_size: int | None = Field(default=None, ge=0)
    mem_buf_length: int | None = Field(default=None, ge=0)
    mem_buf_size: int | None = Field(default=None, ge=0)
    q_out_size: int | None = Field(default=None, ge=0)


class BatchOptions(ResourceModel):
    """Batching options shared by bulk-capable destinations."""

    batch_lines: int | None = Field(default=None, ge=0, alias="batch-lines")
    batch_bytes: int | None = Field(default=None, ge=0, alias="batch-bytes")
    batch_timeout: int | None = Field(default=None, ge=0, alias="batch-timeout")


class RawString(ResourceModel):
    """Text emitted verbatim, written as {raw_string: ...} in resources."""

    raw_string: str


class ValuePairs(ResourceModel):
    """value-pairs selectors, rendered without quoting."""

    scope: RawString | None = None
    exclude: RawString | None = None
    key: RawString | None = None
    pair: RawString | None = None


# =============================================================================
# Destination kinds
# =============================================================================


class SyslogOutput(BatchOptions):
    """RFC5424 syslog over the network."""

    host: str
    port: int | None = Field(default=None, ge=0, le=65535)
    transport: str | None = None
    close_on_input: bool | None = None
    flags: list[str] = Field(default_factory=list)
    flush_lines: int | None = Field(default=None, ge=0)
    so_keepalive: bool | None = None
    suppress: int | None = Field(default=None, ge=0)
    template: str | None = None
    template_escape: bool | None = None
    tls: TLSOptions | None = None
    ts_format: str | None = None
    disk_buffer: DiskBuffer | None = None
    persist_name: str | None = None


class FileOutput(ResourceModel):
    """Local file on the daemon's filesystem."""

    path: str
    create_dirs: bool | None = None
    dir_group: str | None = None
    dir_owner: str | None = None
    dir_perm: int | None = Field(default=None, ge=0)
    template: str | None = None
    disk_buffer: DiskBuffer | None = None
    persist_name: str | None = None


class MongoDBOutput(BatchOptions):
    """MongoDB collection."""

    collection: str
    compaction: bool | None = None
    dir: str | None = None
    disk_buffer: DiskBuffer | None = None
    uri: str | None = None
    value_pairs: ValuePairs | None = None
    bulk: bool | None = None
    bulk_bypass_validation: bool | None = None
    bulk_unordered: bool | None = None
    persist_name: str | None = None


class RedisOutput(BatchOptions):
    """Redis server, one command per message."""

    host: str | None = None
    port: int | None = Field(default=None, ge=0, le=65535)
    auth: SecretRef | None = None
    command: list[str] = Field(default_factory=list)
    log_fifo_size: int | None = Field(default=None, ge=0, alias="log-fifo-size")
    retries: int | None = Field(default=None, ge=0)
    workers: int | None = Field(default=None, ge=0)
    time_reopen: int | None = Field(default=None, ge=0)
    disk_buffer: DiskBuffer | None = None
    persist_name: str | None = None


class HTTPOutput(BatchOptions):
    """Generic HTTP endpoint."""

    url: str
    headers: list[str] = Field(default_factory=list)
    method: str | None = None
    user_agent: str | None = None
    user: str | None = None
    password: SecretRef | None = None
    body: str | None = None
    body_prefix: str | None = None
    body_suffix: str | None = None
    delimiter: str | None = None
    timeout: int | None = Field(default=None, ge=0)
    time_reopen: int | None = Field(default=None, ge=0)
    workers: int | None = Field(default=None, ge=0)
    tls: TLSOptions | None = None
    disk_buffer: DiskBuffer | None = None
    persist_name: str | None = None


Destination = SyslogOutput | FileOutput | MongoDBOutput | RedisOutput | HTTPOutput

# Payload field names, in the order they are probed.
DESTINATION_KINDS: tuple[str, ...] = ("syslog", "file", "mongodb", "redis", "http")


class OutputSpec(ResourceModel):
    """A named destination.

    An output with no kind populated is valid and renders an empty
    destination block.
    """

    namespace: str = ""
    name: str
    syslog: SyslogOutput | None = None
    file: FileOutput | None = None
    mongodb: MongoDBOutput | None = None
    redis: RedisOutput | None = None
    http: HTTPOutput | None = None

    @model_validator(mode="after")
    def validate_single_kind(self) -> OutputSpec:
        """At most one destination kind may be populated."""
        populated = [kind for kind in DESTINATION_KINDS if getattr(self, kind) is not None]
        if len(populated) > 1:
            raise ValueError(f"output '{self.namespace}/{self.name}' sets multiple destination kinds: {populated}")
        return self

    @property
    def destination(self) -> Destination | None:
        """The populated destination payload, or None."""
        for kind in DESTINATION_KINDS:
            payload: Destination | None = getattr(self, kind)
            if payload is not None:
                return payload
        return None
