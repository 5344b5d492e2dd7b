# minimapreduce

A small MapReduce engine that runs entirely in one process. A `Coordinator`
hands out map tasks and then reduce tasks. Several `Worker` threads carry the
tasks out, and the results are written as plain text files on disk. A
word-count application is included.

## Installing

```
pip install .
```

## Counting words from the command line

```
minimapreduce book1.txt book2.txt book3.txt
```

Options:

- `--directory DIR` sets where intermediate and output files go. The default
  is `file`. The directory is created if it does not exist.
- `--reduce N` sets the number of reduce partitions. The default is 10.
- `--workers N` sets the number of worker threads. The default is 8.

If you give no input files, the command prints its usage and exits with
status 1.

The coordinator prints each input file name when it starts. Each input file
becomes one map task. Map output is split by key hash into the reduce
partitions and written as JSON lines to intermediate files named
`mr-<map task>-<partition>`. Each partition is then reduced into
`mr-out-<partition>`. Each line of an output file holds a word and its count:

```
Alice 12
Rabbit 5
```

A word is a run of ASCII letters. Case matters, so `The` and `the` are
counted separately. Any other character, including a non-ASCII letter, ends
a word.

If a map task fails, for example because its input file cannot be read, the
error is printed to standard error. The task is still marked as finished.

## Using it from Python

```python
from minimapreduce.cli import run

run(["book1.txt", "book2.txt"], directory="out", n_reduce=10, n_workers=8)
```

To run a job of your own, subclass `MapReduceApp` from
`minimapreduce.wordcount`. Implement `map(filename, contents)`, which returns
a list of `KeyValue` pairs, and `reduce(key, values)`, which returns a string.
Then give it to `Worker` together with a shared `Coordinator`:

```python
import threading

from minimapreduce.coordinator import Coordinator
from minimapreduce.helper import KeyValue
from minimapreduce.wordcount import MapReduceApp
from minimapreduce.worker import Worker


class LongestLine(MapReduceApp):
    def map(self, filename, contents):
        return [KeyValue("longest", str(len(line))) for line in contents.splitlines()]

    def reduce(self, key, values):
        return max(values, key=int)


coordinator = Coordinator(["a.txt", "b.txt"], 10)
workers = [Worker(coordinator, LongestLine(), "out") for _ in range(4)]
threads = [threading.Thread(target=w.work) for w in workers]
for t in threads:
    t.start()
for t in threads:
    t.join()
```

The output directory must already exist when you use `Worker` directly.
`Worker` also takes `poll_interval`, the number of seconds it waits before
asking again when no task is free. The default is 1.0.

`minimapreduce.helper` provides the pieces the workers use:

- `ihash` is a 32-bit FNV-1a key hash.
- `partition_sort` orders pairs by bucket and then by key.
- `read_file` reads an input file.
- `write_files` writes intermediate files. It writes each one under a
  temporary name first, then renames it into place.

## Task timeouts

`Coordinator.done()` reports whether every task has finished. When it is
called, any map task that has been pending for 10 seconds or more goes back
in the queue. Once all map tasks have finished, it does the same for pending
reduce tasks. The workers and `run` never call `done()` themselves, so
timed-out tasks are only put back if your own code calls it.

## Limitations

- Everything runs in one process. Workers share the coordinator as an
  ordinary Python object. There is no network protocol, so workers cannot
  run on other machines.
- A reduce task reads only the intermediate files from map tasks 0 to 7.
  When there are more than eight input files, the words from the ninth and
  later files are left out of the output.