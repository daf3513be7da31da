# corekit

A small collection of general-purpose helpers for Python programs. It needs
nothing outside the standard library.

## Modules

- **`corekit.versioncmp`**: `strverscmp(a, b)` compares two strings so that
  embedded numbers order by value (`file9` before `file10`; runs with leading
  zeros count as fractions, so `002` sorts before `01`). `versionsort(names)`
  sorts with it, and `alphasort(names)` sorts by the current locale's collation.
- **`corekit.fileutil`**: `append_slash(path)`, `exists(path)`,
  `mkdirs(folder_path)`, `get_size(file_path)`, `get_stream_size(stream)`
  (leaves the stream at position 0), `read_lines(file_path)` (yields
  `(line_number, text)` from 1, line endings stripped) and `read_all(file_path)`
  (returns bytes).
- **`corekit.dirstream`**: `DirStream(dirname)`, a directory stream with
  `read()`, `rewind()`, `tell()`, `seek(loc)` and `close()`. It can be iterated
  and used as a context manager. Each `DirEntry` has a `name`, a `type`
  (`DT_REG`, `DT_DIR`, `DT_CHR`), and an `off`: the position of the following
  entry, which can be passed to `seek`, or `END_OF_STREAM` after the last one.
  Positions are 31-bit hashes of names, computed by `name_hash(name)`.
  `scandir(dirname, filter=None, key=None)` reads a whole directory into a list
  sorted by `key`, or by name if no key is given.
- **`corekit.inireader`**: an INI parser that calls a handler for every
  `name = value` (or `name: value`) pair: `parse_string`, `parse_stream` and
  `parse_file`. `IniOptions` controls multi-line values, a leading byte order
  mark, comment prefixes, inline comments, line length, stopping at the first
  error, a handler call on each new section, names without values, and passing
  the line number to the handler. The handler must return a true value;
  otherwise, and on malformed lines, `IniParseError` is raised with `lineno`
  set to the first line in error.
- **`corekit.semaphore`**: counting `Semaphore(value)` objects with `wait()`,
  `try_wait()`, `timed_wait(abs_timeout)` (a deadline in seconds since the
  epoch), `post()`, `value()` and `close()`. `open_semaphore(name, create,
  exclusive, value)` opens a semaphore shared by name within the process; it
  goes away when its last handle is closed, so `unlink_semaphore(name)` has
  nothing to do.
- **`corekit.portable`**: `PortableThread(target, arg, name)` runs
  `target(arg)` on a new thread; `start()` starts it and `join()` returns the
  result or raises the target's exception. `current_thread_id()` returns the
  operating-system id of the calling thread.
- **`corekit.thpool`**: `ThreadPool(num_threads)`, a fixed pool of workers
  named `thpool-<n>` that run `function(arg)` jobs in the order given by
  `add_work`. It offers `wait()`, `pause()`, `resume()`, `destroy()`,
  `num_threads_working()` and `num_threads_alive`, and destroys itself when
  used as a context manager.

## Installing

```
pip install .
```

## Examples

Sorting names with versions in mind:

```python
from corekit.versioncmp import versionsort

versionsort(["file10", "file9", "file1"])
# ['file1', 'file9', 'file10']
```

Reading INI data:

```python
from corekit.inireader import parse_string

values = {}

def handler(section, name, value):
    values[(section, name)] = value
    return True

parse_string("[server]\nport = 8080\n", handler)
# values == {("server", "port"): "8080"}
```

Walking a directory stream:

```python
from corekit.dirstream import DirStream

with DirStream(".") as stream:
    for entry in stream:
        print(entry.name, entry.type)
```

Running work in a thread pool:

```python
from corekit.thpool import ThreadPool

results = []

with ThreadPool(4) as pool:
    for n in range(10):
        pool.add_work(results.append, n)
    pool.wait()
```

## What it does not include

There is no recursive directory walker: `DirStream` and `scandir` list one
directory at a time. Apart from semaphores, there are no locking primitives of
its own (no mutex, reader/writer lock or condition variable); use the
standard library's `threading` module for those. There is no command-line
program.

## Running the tests

```
pip install .[test]
pytest
```