# xarkit

Pure-Python building blocks for the xar archive format: the fixed binary
header, the zlib-compressed table of contents and its checksum, archive
options, bzip2 encoding of data, the sources and sinks that carry file data,
path handling and lenient base64 decoding. Only the standard library is used.

## Modules

### `xarkit.header`

- `parse_header(stream)` reads the header from a binary stream, checks the
  `xar!` magic, the recorded size and, for `ChecksumAlgorithm.OTHER`, the
  NUL-terminated algorithm name. Bytes beyond the known layout are skipped.
  Problems raise `XarError`.
- `build_header(checksum_name, toc_compressed, toc_uncompressed)` makes the
  header for a new archive. `None` or `"none"` means no TOC checksum,
  `"sha1"` and `"md5"` use the classic algorithm codes, and any other name
  gives the 64-byte extended header that stores the name.
- `XarHeader.to_bytes()` encodes a header in network byte order;
  `XarHeader.checksum_name()` returns the algorithm name, or `None` when
  there is no checksum.

### `xarkit.toc`

- `compress_toc(xml, chunk_size)` deflates the serialized TOC at the best
  compression level, `chunk_size` bytes at a time with a sync flush after
  each chunk, then finishes the stream.
- `decompress_toc(data)` inflates it again; corrupt or truncated data raises
  `XarError`.
- `TocDigest(name)` is a running checksum over the compressed TOC (`update`,
  `digest`, `size`, `enabled`); with `None` or `"none"` it computes nothing.
- `creation_time(timestamp)` formats a time, by default now, as
  `YYYY-MM-DDTHH:MM:SSZ` in UTC.

### `xarkit.options`

`Options` holds named options; several values may share a name and `get`
returns the newest. `set` validates and applies side effects:

- `toc-cksum` sets `heap_reserve` to the digest size (0 for `none`) and raises
  `XarError` once `freeze_toc_checksum()` has been called;
- `file-chksum` must name a known digest or `none`;
- `strip-components` must be a non-negative integer;
- `extract-stdout` and `rfc6713format` set `to_stdout` and `rfc_format`.

`unset` removes every value under a name. `check_prop(name)` applies
`prop-include` / `prop-exclude`: when any include rule exists only included
properties pass, otherwise excluded ones are left out. `read_size` gives the
copy buffer size from `rsize` (default 32768, at least 512).
`Options(writing=True)` starts with gzip compression, sha1 file checksums and
room for a sha1 TOC checksum. `digest_size(name)` returns the size of a
hashlib digest, raising `ValueError` for unknown or unsupported ones.

### `xarkit.data`

`BufferSource` and `StreamSource` supply file contents; `BufferSink` (fixed
length, raises `XarError` on overrun) and `StreamSink` receive them.
`carries_data(file_type, link_kind)` is true for regular files and for hard
links marked `original`.

### `xarkit.bzip`

`BzipEncoder(level)` and `BzipDecoder` encode and decode data streams
incrementally (`feed`, and `finish` for the encoder); failures raise
`XarError` and are passed to an `ErrorReporter` if one is given.
`is_compressed(data)` spots data already in bzip2 form;
`compression_level(value)` reads a compression argument (default 9, range
1 to 9).

### `xarkit.paths`

`split_archive_path(path)` turns a path being added into an `ArchivePath`
(entry `names`, their `fs_paths`, and flags for absolute paths, skipped `..`
components and a trailing slash). `strip_components(path, components)` drops
leading components, returning `None` when too few remain.

### `xarkit.base64` and `xarkit.errors`

`from_base64(data)` decodes base64, skipping characters outside the alphabet
and stopping at a NUL byte; malformed input raises `ValueError`.
`XarError`, `Severity`, `ErrorKind`, `ErrorContext` and `ErrorReporter`
report problems; `ErrorReporter.register(callback, user_context)` installs a
callback that `report(severity, kind)` calls with the current context.

## Example

```python
import io
from xarkit.header import build_header, parse_header
from xarkit.toc import compress_toc, decompress_toc

xml = b'<?xml version="1.0" encoding="UTF-8"?><xar><toc/></xar>'
packed = compress_toc(xml, 32768)
header = build_header("sha1", len(packed), len(xml))
parsed = parse_header(io.BytesIO(header.to_bytes()))
assert parsed.checksum_name() == "sha1"
assert decompress_toc(packed) == xml
```

## What it does not do

xarkit provides the pieces of the format, not a whole archiver. It has no
command-line tool, does not build or parse the XML table of contents itself,
does not lay out or read the heap of a complete archive, and does not create
or check signatures, restore file metadata or handle extended attributes.

## Tests

The test suite runs under pytest, available through the `test` extra.