# avsdk

Pure-Python building blocks for file analysis:

- CRC-32, MD5, SHA-1, SHA-256/224 and SHA-512/384 digests, each usable
  in one call or fed piece by piece, with HMAC for the SHA-2 families;
- a combined hashing context that computes several digests in one pass
  over a buffer or a file;
- a minimal reader for PE (Portable Executable) headers and import tables.

The package needs no third-party libraries.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## One-shot digests

Every function returns the raw digest as `bytes`.

```python
from avsdk.crc32 import crc32
from avsdk.md5 import md5
from avsdk.sha1 import sha1
from avsdk.sha256 import sha256, hmac_sha256
from avsdk.sha512 import sha512, hmac_sha512

crc32(b"abc").hex()                 # four big-endian bytes
md5(b"abc").hex()
sha1(b"abc").hex()
sha256(b"abc").hex()
sha256(b"abc", is224=True).hex()    # SHA-224
sha512(b"abc").hex()
sha512(b"abc", is384=True).hex()    # SHA-384

key = b"secret"
hmac_sha256(key, b"message").hex()
hmac_sha512(key, b"message", is384=True).hex()
```

## Streaming

The classes `Crc32`, `Md5`, `Sha1`, `Sha256` and `Sha512` take data
through `update(data, is_final=False)`; `digest()` returns the bytes and
`hexdigest()` the hex string.

How the `is_final` flag is used differs between algorithms:

- `Crc32` applies its final XOR in the update marked final, and `Sha1`
  pads and closes the message there. For these two, mark the last
  update with `is_final=True` before calling `digest()`.
- `Md5`, `Sha256` and `Sha512` accept the flag but ignore it; padding is
  done by `digest()`, which leaves the object unchanged, so it may be
  called at any time.

```python
from avsdk.sha1 import Sha1

h = Sha1()
h.update(b"first part")
h.update(b"second part", is_final=True)
print(h.hexdigest())
```

`Sha256` and `Sha512` also offer `copy()`. `HmacSha256(key, is224=False)`
and `HmacSha512(key, is384=False)` provide streaming HMAC with `update`,
`digest` and `hexdigest`.

## Several digests at once

`avsdk.hashes` runs every selected algorithm over the same input.
`HashKind` is a flag enum (`CRC32`, `MD5`, `SHA1`, `SHA256`, `SHA512`,
`ALL`); combine members with `|`. Passing `None` or `-1` as the flags
selects all of them.

```python
from avsdk.hashes import HashContext, HashKind, hash_data, hash_file

result = hash_data(b"hello", HashKind.MD5 | HashKind.SHA256)
result.md5                  # bytes
result.sha1                 # None: not selected
result[HashKind.SHA256]     # same as result.sha256
result.hexdigests()         # {"md5": "...", "sha256": "..."}

result = hash_file("sample.bin", HashKind.CRC32 | HashKind.SHA1)
```

- `hash_data` hashes only the first 4096 bytes (`BLOCK_SIZE`) of its
  input, as a single final block.
- `hash_file` reads the whole file in 4096-byte blocks; an unreadable
  file raises the usual `OSError`.
- For incremental input, use `HashContext(flags)` with
  `update(block, is_final=False)` and `final()`. Each block may hold at
  most `BLOCK_SIZE` bytes; a larger one raises `ValueError`. Finish with
  an update marked `is_final=True` (an empty one will do) so that CRC-32
  and SHA-1 are closed.

## PE files

```python
from avsdk.ntpe import PeFormatError, align_up, get_ntpe_context, rva_to_offset
from avsdk.pe_imports import get_imports

with open("program.exe", "rb") as stream:
    data = stream.read()

try:
    ctx = get_ntpe_context(data)
except PeFormatError as exc:
    print("not a PE file:", exc)
else:
    print(hex(ctx.machine), ctx.is_64bit, len(ctx.sections))
    for module, functions in get_imports(data).items():
        print(module, sorted(functions))
```

- `get_ntpe_context` accepts 32-bit (i386) and 64-bit (AMD64) images and
  returns an `NtpeContext` with the machine, alignments, lookup cell
  size, the sixteen data directories as `(rva, size)` pairs and the
  section headers.
- `rva_to_offset(data, rva)` maps a relative virtual address to a file
  offset, using section sizes rounded up to the section alignment.
- `get_imports` maps each imported module name, upper-cased, to the set
  of function names it supplies; functions imported by ordinal appear as
  `#ord: <number>`. An image without an import directory gives `{}`.
- Malformed or truncated images, and addresses outside every section,
  raise `PeFormatError` (a subclass of `ValueError`).

## What it does not do

- There are no fuzzy hashes (such as ssdeep or TLSH); `HashKind` covers
  only the five digests above.
- The PE reader does not parse exports, resources or relocations, and
  does not check whether imported modules exist on the system.
- There is no command-line tool; everything is used from Python.