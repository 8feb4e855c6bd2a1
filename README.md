# astikit

A collection of small, dependency-free building blocks for Python programs.
It needs Python 3.10 or later and nothing outside the standard library.

## Installation

```
pip install astikit
```

To run the test suite from a checkout:

```
pip install ".[test]"
pytest
```

## What is inside

| Module | Highlights |
| --- | --- |
| `astikit.bits` | `BitFlags`, an `int` with `add`, `delete` and `has` that work on unsigned 64-bit values; `bool_to_uint32`. |
| `astikit.bytesutil` | `BytesIterator` for sequential reads through a byte string (`next_byte`, `next_bytes`, `next_bytes_no_copy`, `seek`, `skip`, `dump`, ...), raising `IndexError` on overruns; `bytes_pad` and `str_pad` with `PadOption.CUT`, `PadOption.LEFT` and `PadOption.RIGHT`. |
| `astikit.rational` | `Rational` with `num` and `den`, `to_float`, and `marshal_text` / `unmarshal_text` for the `"num/den"` form. |
| `astikit.jsonutil` | `json_equal` compares two values by their JSON encoding; `json_clone` deep-copies through a JSON round trip. |
| `astikit.flags` | `flag_cmd` pops a leading sub-command from an argument list (by default `sys.argv`); `FlagStrings` collects unique values of a repeated flag, in order. |
| `astikit.events` | `EventManager` with `on`, `off` and `emit`. Handlers run in registration order; one that returns `True` is removed after it runs. |
| `astikit.binary` | `BitsWriter` writes bits, bit strings such as `"10010"`, bytes and unsigned integers to any object with a `write` method, in either `ByteOrder`. `BitsWriterBatch` chains writes and keeps the first error, available from `err()`. Also `byte_hamming84_decode` and `byte_parity`. |
| `astikit.limiter` | `Limiter` holding named `LimiterBucket`s: `inc()` succeeds at most `cap` times per `period` seconds. |
| `astikit.streams` | `copy_stream` and `CancellableReader`, which raise `concurrent.futures.CancelledError` once a `threading.Event` is set; `NopCloser`; `WriterAdapter`, which splits written data on a separator and hands each piece to a callback; `Piper`, an in-memory pipe whose writes never block. |
| `astikit.archive` | `make_zip` and `extract_zip`. Both accept paths such as `out/f.zip/root` to target a root path inside the archive. Symlinks are kept as symlinks. |
| `astikit.shm` | Named `SharedMemory` segments (`create`, `open`, `write_bytes`, `read_bytes`), plus `VariableSizeSharedMemoryWriter` and `VariableSizeSharedMemoryReader`, which exchange `ReadOptions`. |

## Examples

Writing bits:

```python
import io
from astikit.binary import BitsWriter, ByteOrder

buf = io.BytesIO()
w = BitsWriter(buf, ByteOrder.BIG, None)
w.write("000000")
w.write(False)
w.write(True)        # buf now holds b"\x01"
w.write_uint(5, 16)  # b"\x00\x05"
w.write_n(4, 3)
w.write_n(4096, 13)  # b"\x90\x00"
```

Padding:

```python
from astikit.bytesutil import str_pad, PadOption

str_pad("test", " ", 6)                     # "  test"
str_pad("test", " ", 6, PadOption.RIGHT)    # "test  "
str_pad("testtest", " ", 4, PadOption.CUT)  # "test"
```

Events:

```python
from astikit.events import EventManager

events = EventManager()
handler_id = events.on("tick", lambda payload: print(payload))
events.emit("tick", 1)
events.off(handler_id)
```

A pipe between threads:

```python
from astikit.streams import Piper

with Piper(read_timeout=1.0, read_timeout_error=TimeoutError("no data")) as pipe:
    pipe.write(b"test")
    pipe.read()  # b"test"
```

Zipping a directory into a root path of an archive and extracting it again:

```python
from astikit.archive import make_zip, extract_zip

make_zip("out/f.zip/root", "data", None)
extract_zip("restored", "out/f.zip/root", None)
```

`extract_zip` raises `ValueError` when nothing in the archive lies under the
given root path, or when an entry would land outside the destination.

Shared memory:

```python
from astikit.shm import VariableSizeSharedMemoryWriter, VariableSizeSharedMemoryReader

with VariableSizeSharedMemoryWriter("demo") as writer, VariableSizeSharedMemoryReader() as reader:
    options = writer.write_bytes(b"test")
    reader.read_bytes(options)  # b"test"
```

## What this package does not do

There are no HTTP helpers: no HTTP client with retries, no parallel
downloader and no web middlewares. There is also no general-purpose
error aggregation or cleanup-callback registry. The package has no
command-line program; every module is meant to be imported.