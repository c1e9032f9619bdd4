"""Destination block rendering.

One driver per destination kind, each owning its option grammar. Options
appear in a fixed per-kind order and only when set; no defaults are filled
in here. Every driver ends with persist_name(), which defaults to the block
identifier so the daemon's persistent state survives reordering.

An output with no kind populated still renders a (syntactically empty)
destination block:

    destination "output_default_empty" {

    };
"""

from __future__ import annotations

from dataclasses import dataclass

from logroute.contracts.outputs import (
    BatchOptions,
    DiskBuffer,
    FileOutput,
    HTTPOutput,
    MongoDBOutput,
    OutputSpec,
    RawString,
    RedisOutput,
    SyslogOutput,
    TLSOptions,
    ValuePairs,
)
from logroute.contracts.secrets import SecretRef, SecretResolver
from logroute.engine.syntax import Raw, block, call, nested, option, quote, statement


@dataclass(frozen=True, slots=True)
class RenderedDestination:
    identifier: str
    text: str


def _secret(resolver: SecretResolver, ref: SecretRef | None) -> str | None:
    if ref is None:
        return None
    return resolver.resolve(ref)


def _raw(value: RawString | None) -> Raw | None:
    return Raw(value.raw_string) if value is not None else None


def render_tls(tls: TLSOptions | None, resolver: SecretResolver) -> str:
    if tls is None:
        return ""
    return nested(
        "tls",
        option("ca_dir", _secret(resolver, tls.ca_dir)),
        option("ca_file", _secret(resolver, tls.ca_file)),
        option("cert_file", _secret(resolver, tls.cert_file)),
        option("key_file", _secret(resolver, tls.key_file)),
        option("peer_verify", tls.peer_verify),
        option("use-system-cert-store", tls.use_system_cert_store),
        option("cipher-suite", tls.cipher_suite),
        option("ssl_version", tls.ssl_version),
    )


def render_disk_buffer(disk_buffer: DiskBuffer | None) -> str:
    if disk_buffer is None:
        return ""
    return call(
        "disk-buffer",
        option("reliable", disk_buffer.reliable),
        option("compaction", disk_buffer.compaction),
        option("dir", disk_buffer.dir),
        option("disk_buf_size", disk_buffer.disk_buf_size),
        option("mem_buf_length", disk_buffer.mem_buf_length),
        option("mem_buf_size", disk_buffer.mem_buf_size),
        option("q_out_size", disk_buffer.q_out_size),
    )


def render_value_pairs(value_pairs: ValuePairs | None) -> str:
    if value_pairs is None:
        return ""
    return nested(
        "value_pairs",
        option("scope", _raw(value_pairs.scope)),
        option("exclude", _raw(value_pairs.exclude)),
        option("key", _raw(value_pairs.key)),
        option("pair", _raw(value_pairs.pair)),
    )


def render_batch(batch: BatchOptions) -> tuple[str, str, str]:
    return (
        option("batch-lines", batch.batch_lines),
        option("batch-bytes", batch.batch_bytes),
        option("batch-timeout", batch.batch_timeout),
    )


def render_syslog(dest: SyslogOutput, resolver: SecretResolver, persist_name: str) -> str:
    return call(
        "syslog",
        quote(dest.host),
        option("port", dest.port),
        option("transport", dest.transport),
        option("close_on_input", dest.close_on_input),
        option("flags", dest.flags),
        option("flush_lines", dest.flush_lines),
        option("so_keepalive", dest.so_keepalive),
        option("suppress", dest.suppress),
        option("template", dest.template),
        option("template_escape", dest.template_escape),
        render_tls(dest.tls, resolver),
        option("ts_format", dest.ts_format),
        *render_batch(dest),
        render_disk_buffer(dest.disk_buffer),
        option("persist_name", persist_name),
    )


def render_file(dest: FileOutput, persist_name: str) -> str:
    return call(
        "file",
        quote(dest.path),
        option("create_dirs", dest.create_dirs),
        option("dir_group", dest.dir_group),
        option("dir_owner", dest.dir_owner),
        option("dir_perm", dest.dir_perm),
        option("template", dest.template),
        render_disk_buffer(dest.disk_buffer),
        option("persist_name", persist_name),
    )


def render_mongodb(dest: MongoDBOutput, persist_name: str) -> str:
    return call(
        "mongodb",
        option("collection", dest.collection),
        option("compaction", dest.compaction),
        option("dir", dest.dir),
        render_disk_buffer(dest.disk_buffer),
        option("uri", dest.uri),
        render_value_pairs(dest.value_pairs),
        *render_batch(dest),
        option("bulk", dest.bulk),
        option("bulk_bypass_validation", dest.bulk_bypass_validation),
        option("bulk_unordered", dest.bulk_unordered),
        option("persist_name", persist_name),
    )


def render_redis(dest: RedisOutput, resolver: SecretResolver, persist_name: str) -> str:
    return call(
        "redis",
        option("host", dest.host),
        option("port", dest.port),
        option("auth", _secret(resolver, dest.auth)),
        option("command", dest.command),
        *render_batch(dest),
        option("log-fifo-size", dest.log_fifo_size),
        option("retries", dest.retries),
        option("workers", dest.workers),
        option("time_reopen", dest.time_reopen),
        render_disk_buffer(dest.disk_buffer),
        option("persist_name", persist_name),
    )


def render_http(dest: HTTPOutput, resolver: SecretResolver, persist_name: str) -> str:
    return call(
        "http",
        option("url", dest.url),
        option("headers", dest.headers),
        option("method", dest.method),
        option("user_agent", dest.user_agent),
        option("user", dest.user),
        option("password", _secret(resolver, dest.password)),
        option("body", dest.body),
        option("body_prefix", dest.body_prefix),
        option("body_suffix", dest.body_suffix),
        option("delimiter", dest.delimiter),
        option("timeout", dest.timeout),
        option("time_reopen", dest.time_reopen),
        option("workers", dest.workers),
        *render_batch(dest),
        render_tls(dest.tls, resolver),
        render_disk_buffer(dest.disk_buffer),
        option("persist_name", persist_name),
    )


def render_destination(output: OutputSpec, resolver: SecretResolver, identifier: str) -> RenderedDestination:
    """Render an output as a named destination block.

    Args:
        output: The output to render
        resolver: Resolver scoped to the output's namespace
        identifier: Block identifier (output_<ns>_<name> or clusteroutput_...)

    Raises:
        SecretResolutionError: If a secret-valued option cannot be resolved
    """
    destination = output.destination
    match destination:
        case None:
            return RenderedDestination(identifier, block("destination", identifier, [""]))
        case SyslogOutput():
            driver = render_syslog(destination, resolver, destination.persist_name or identifier)
        case FileOutput():
            driver = render_file(destination, destination.persist_name or identifier)
        case MongoDBOutput():
            driver = render_mongodb(destination, destination.persist_name or identifier)
        case RedisOutput():
            driver = render_redis(destination, resolver, destination.persist_name or identifier)
        case HTTPOutput():
            driver = render_http(destination, resolver, destination.persist_name or identifier)
        case _:
            raise TypeError(f"unsupported destination: {type(destination).__name__}")
    return RenderedDestination(identifier, block("destination", identifier, [statement(driver)]))
