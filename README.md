# admincore

Building blocks for admin-style back ends.

## What is inside

- `admincore.storage`
  - `message.Message`: a queue message with `id`, `stream`, `values`,
    `error_count` and a `prefix` property stored under the `__host` value key.
  - `memory_cache.MemoryCache`: a thread-safe in-memory cache with per-key
    expiry (`get`, `set`, `delete`, `hash_get`, `hash_delete`, `increase`,
    `decrease`, `expire`). Missing or expired keys read as `""`;
    `increase`, `decrease` and `expire` on a missing key raise `CacheError`.
  - `redis_cache.RedisCache`: the same operations on a `redis.Redis` client.
    The constructor pings the server; `get` and `hash_get` raise `KeyError`
    for a missing key.
  - `memory_queue.MemoryQueue`: in-memory streams; `register(name, func)`
    starts a consumer thread, and a consumer that raises has its message
    retried up to three times with a growing delay. `run` blocks until
    `shutdown`.
  - `redis_locker.RedisLocker`: `lock(key, ttl)` obtains a Redis lock without
    waiting and raises `redis.exceptions.LockError` if it is held.
- `admincore.server`
  - `manager.Server`: starts every added `Runnable` in its own thread, stops
    them when a `threading.Event` is set, and raises a service's failure or a
    `ServerError` when the services do not finish within
    `graceful_shutdown_timeout` seconds (default 5).
  - `listener.Listener`: an HTTP service for a WSGI application, with
    optional TLS and start/end hooks; `new_healthz` (`/healthz`, `:4000`) and
    `new_readyz` (`/readyz`, `:2000`) answer 200 on their path.
- `admincore.tools`
  - `language.parse_accept_language`: orders `Accept-Language` codes by
    quality, optionally keeping only supported ones.
  - `search`: `resolve_search_query` turns a dataclass whose fields are
    declared with `search_field(...)` into where, order and join clauses on a
    `Condition`, for `mysql` (back-quoted) or `postgres`.
  - `excel.convert_num_to_chars`: spreadsheet column letters for an index.
  - `headers`: `get_request_id`, `get_username`, `get_header_first` and
    `new_request_id` over request metadata.
  - `sql_logger.SqlLogger`: logs SQL messages and statement traces to a
    standard `logging.Logger`, with `LogLevel`, slow-query detection and
    optional colours set by `SqlLoggerConfig`.
- `admincore.rpclog`
  - `fields.Fields`: a small set of log fields.
  - `levels`: `Code` and `Level` enums, `default_code_to_level`,
    `default_client_code_to_level`, duration fields and
    `server_call_fields` / `client_call_fields` for `/service/method` names.

## Installation

```
pip install admincore
```

## Examples

Cache with expiry:

```python
from admincore.storage.memory_cache import MemoryCache

cache = MemoryCache()
cache.set("visits", 1, 60)
cache.increase("visits")
print(cache.get("visits"))  # "2"
```

Running health and readiness endpoints until told to stop:

```python
import threading

from admincore.server.listener import new_healthz, new_readyz
from admincore.server.manager import Server

stop = threading.Event()
server = Server(graceful_shutdown_timeout=5.0)
server.add(new_healthz(addr="127.0.0.1:4000"), new_readyz(addr="127.0.0.1:2000"))
server.start(stop)  # blocks until stop.set() is called from another thread
```

Search conditions:

```python
from dataclasses import dataclass

from admincore.tools.search import Condition, resolve_search_query, search_field

@dataclass
class UserQuery:
    name: str = search_field("type:contains;column:name;table:sys_user", default="")

condition = Condition()
resolve_search_query("mysql", UserQuery(name="ad"), condition)
print(condition.where)  # {'`sys_user`.`name` like ?': ['%ad%']}
```

Language negotiation:

```python
from admincore.tools.language import parse_accept_language

parse_accept_language("en-US,en;q=0.8,zh;q=0.9", [])
# ['en-us', 'zh', 'en']
```

Spreadsheet columns:

```python
from admincore.tools.excel import convert_num_to_chars

convert_num_to_chars(0)   # "A"
convert_num_to_chars(26)  # "AA"
```

## What it does not do

- There is no gRPC server, client or interceptor chain; `admincore.rpclog`
  only provides the fields and status-code to log-level mapping such
  interceptors would use.
- Queues are in memory only; there is no Redis- or NSQ-backed queue.
- There is no database connection or read/write-splitting setup, and no
  spreadsheet file writer beyond column naming.
- The package has no command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```