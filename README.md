# fanouttopic

A thread-safe, buffering publish-subscribe topic. Every value sent to a
`Topic` is copied to all of its current receivers. Values that a receiver has
not taken yet are queued in memory, and each receiver chooses how its queue
is bounded. Receivers can join and leave at any time, and the most recent
value sent to a topic can be read with `recent`.

Everything lives in the module `fanouttopic.topic`.

## Installation

```
pip install fanouttopic
```

## Usage

```python
from fanouttopic.topic import Topic, TopicClosedError, recent

with Topic() as topic:
    receiver = topic.subscribe(0, False)

    topic.send("hello")
    topic.send("world")

    print(receiver.receive(1.0))   # "hello"
    print(receiver.receive(1.0))   # "world"

    print(recent(topic))           # ("world", True)

    receiver.unsubscribe()
```

### Queue limits

`Topic.subscribe(limit=0, include_recent=False)` returns a new `Receiver`.
The `limit` argument sets how values are held for that receiver while it is
not reading:

- `limit == 0`: the queue is unbounded and every value is kept.
- `limit > 0`: the newest `limit` values are kept; older ones are dropped.
- `limit < 0`: the oldest `abs(limit)` values are kept; newer ones are dropped.

A value that arrives while a thread is already blocked in `receive` on an
empty queue is handed straight to that thread and does not count against the
limit.

If `include_recent` is true, the receiver starts with the most recent value
sent to the topic before it subscribed, if there was one.

### Receiving

`Receiver.receive(timeout=None)` returns the next value. It waits at most
`timeout` seconds, or without limit when `timeout` is `None`. It raises
`TimeoutError` if no value arrives in time, and `TopicClosedError` once the
receiver has been unsubscribed or its topic closed and nothing delivered to
it remains.

A receiver can also be iterated. Iteration stops when the receiver is
unsubscribed or the topic is closed:

```python
import threading

from fanouttopic.topic import Topic

topic = Topic()
receiver = topic.subscribe()

def consume():
    for value in receiver:
        print("got", value)

worker = threading.Thread(target=consume)
worker.start()

for i in range(3):
    topic.send(i)

topic.close()
worker.join()
```

`Receiver` is a context manager and unsubscribes when the block exits.
`unsubscribe()` may be called more than once, and does nothing after the
topic is closed. Values still queued for the receiver are discarded. The
`closed` property tells whether a receiver has been unsubscribed or closed
with its topic.

### Closing

`Topic.close()` ends every subscription and discards the values still queued
for its receivers. It may be called more than once, and `Topic` is a context
manager that closes the topic when the block exits. After a topic is closed:

- `send` does nothing,
- `subscribe` raises `TopicClosedError`,
- every receiver is closed and its iteration ends.

The `closed` property of a `Topic` tells whether it has been closed.

### Most recent value

`recent(topic)` returns a `(value, found)` pair: the latest value sent and
`True`, or `(None, False)` if nothing has been sent yet. The latest value is
still returned after the topic is closed.

## What it does not do

Topics live in the memory of one process and are shared between threads.
Nothing is stored on disk, and there is no way to publish to or subscribe
from another process or over a network. There is no asyncio interface;
`receive` blocks the calling thread.