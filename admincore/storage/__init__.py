"""In-memory and Redis caches, an in-memory queue, a Redis locker and queue messages."""