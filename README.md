# botcord

Building blocks for writing Discord bots in Python. All durations in the
package are in seconds.

- **`botcord.http_client`** – `HTTPClient`, a REST client that performs
  authorised JSON requests on a background worker thread and returns
  `concurrent.futures.Future` objects holding the decoded JSON body.
- **`botcord.rest_endpoints`** – `APIEndpoints`, one blocking method per REST
  route (users, guilds, channels, messages, reactions, roles, interactions,
  follow-up messages, gateway), and `default_client()`, which builds a shared
  client from the `DISCORD_BOT_TOKEN` environment variable.
- **`botcord.rate_limiter`** – `RateLimiter`, `RateLimitInfo` and
  `RequestQueue` for honouring global, per-route and sliding-window limits.
- **`botcord.cache_manager`** – `CacheManager`, a thread-safe TTL cache with
  persistent entries, wildcard key lookup, bulk operations, eviction callbacks,
  statistics and JSON-compatible export/import; `CacheConfig`, `CacheStats`,
  `CacheEntry`, `CacheError`, and `CacheFactory` to create caches.
- **`botcord.memory_cache`** – `MemoryCache`, a lighter TTL cache (one hour by
  default) with shell-style glob key patterns.
- **`botcord.types`** – `Result`, the `GatewayIntent` and `Permission` flags,
  the `ChannelType` and `MessageType` enums, and dataclasses for users, guilds,
  channels, messages, roles, members and embeds.
- **`botcord.info`** – `version()` and `build_info()`.

## Requirements

Python 3.10 or newer. The only runtime dependency is `requests`.

## Caching

```python
from botcord.cache_manager import CacheManager

cache = CacheManager()
cache.set("user:1", {"name": "alice"}, ttl=60)
cache.set_persistent("guild:1", {"name": "Example guild"})

cache.get("guild:1")          # {'name': 'Example guild'}
cache.keys("guild:*")         # ['guild:1']
cache.get_ttl("guild:1")      # inf
cache.get_stats()             # entry counts and estimated memory usage
snapshot = cache.export_cache()
```

In patterns, `*` matches any run of characters and `?` any one character.
A `ttl` of 0 uses `CacheConfig.default_ttl`. Expired entries are dropped when
they are read and during periodic cleanup; persistent entries never expire and
are skipped when the cache makes room. Setting an empty key raises
`CacheError`. `CacheFactory.create_redis_cache()` logs a warning and returns
an in-memory `CacheManager`.

## Results

```python
from botcord.types import Result

ok = Result.success(2)
ok.map(lambda n: n * 10).value()   # 20

failed = Result.failure("not found")
failed.is_error()                  # True
failed.value_or(0)                 # 0
failed.value()                     # raises ResultError
```

## Rate limiting

```python
from botcord.rate_limiter import RateLimiter

limiter = RateLimiter()
limiter.set_endpoint_limit("/channels/123/messages", max_requests=5, window=5.0)
if limiter.can_make_request("/channels/123/messages"):
    ...
limiter.get_wait_time("/channels/123/messages")   # seconds, 0.0 if none
limiter.wait_if_needed("/channels/123/messages")
```

`RequestQueue` runs queued callables one at a time on a worker thread, waiting
on its `RateLimiter` (set with `set_rate_limiter()`) before each one. Call
`start()` to begin and `stop()` to finish, or use it as a context manager.
Exceptions raised by queued callables are logged and do not stop the queue.

## REST calls

Set `DISCORD_BOT_TOKEN` in the environment of your bot process, then:

```python
from botcord.rest_endpoints import APIEndpoints, default_client

api = APIEndpoints()                       # uses default_client()
me = api.get_current_user()

client = default_client()
guilds = client.get("/users/@me/guilds").result()
client.shutdown()
```

`APIEndpoints(client)` can also be given an `HTTPClient` of your own, and
`HTTPClient` can be used as a context manager that shuts down on exit. Every
request carries an `Authorization` header of the form `Bot` followed by the
token, and a JSON content type; the timeout defaults to 30 seconds and is
changed with `set_timeout()`. Responses with a status of 400 or above fail
with `HTTPError`, whose `status` is the HTTP code and whose message includes
the server's error text when one is returned. Requests still queued when the
client shuts down fail with `ClientShutdownError`, and new requests after
shutdown raise it at once.

## What this package does not do

botcord covers REST calls, rate limiting, caching and data models only. It has
no gateway (WebSocket) connection, so it does not receive real-time events;
it has no command framework, message components or embed builder, and no
command-line program. The models in `botcord.types` are plain dataclasses with
no JSON parsing of their own, and there is no Redis-backed cache.