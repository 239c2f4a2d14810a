"""Lua scripts executed server-side by UrlRecordRedisDAO

Redis runs each script as a single atomic unit, so the check-then-write steps
below can't interleave with concurrent requests from other Lambda instances.

Key layout (see RedisKeySchema):
    <prefix>:links:<code>       HASH  code, target, created_at, click_count[, last_accessed_at]
    <prefix>:links:targets      HASH  target -> code
    <prefix>:links:created      ZSET  code scored by created_at (UNIX seconds)
"""

# KEYS: link key, targets key, created key
# ARGV: code, target, created_at (ISO-8601), created_at (UNIX seconds), link key prefix
# Returns: {INSERTED, code} | {TARGET_EXISTS, flat HGETALL reply of the existing record} | {CODE_TAKEN, code}
INSERT_RECORD = """
local existing = redis.call('HGET', KEYS[2], ARGV[2])
if existing then
    return {1, redis.call('HGETALL', ARGV[5] .. existing)}
end
if redis.call('EXISTS', KEYS[1]) == 1 then
    return {2, ARGV[1]}
end
redis.call('HSET', KEYS[1], 'code', ARGV[1], 'target', ARGV[2], 'created_at', ARGV[3], 'click_count', 0)
redis.call('HSET', KEYS[2], ARGV[2], ARGV[1])
redis.call('ZADD', KEYS[3], ARGV[4], ARGV[1])
return {0, ARGV[1]}
"""

INSERTED = 0
TARGET_EXISTS = 1
CODE_TAKEN = 2

# KEYS: link key
# ARGV: last_accessed_at (ISO-8601)
# Returns: flat HGETALL reply of the updated record | nil if the link doesn't exist
HIT_RECORD = """
if redis.call('EXISTS', KEYS[1]) == 0 then
    return false
end
redis.call('HINCRBY', KEYS[1], 'click_count', 1)
redis.call('HSET', KEYS[1], 'last_accessed_at', ARGV[1])
return redis.call('HGETALL', KEYS[1])
"""

# KEYS: link key, targets key, created key
# ARGV: code
# Returns: 1 if the record was deleted | 0 if it doesn't exist
DELETE_RECORD = """
local target = redis.call('HGET', KEYS[1], 'target')
if not target then
    return 0
end
redis.call('DEL', KEYS[1])
redis.call('HDEL', KEYS[2], target)
redis.call('ZREM', KEYS[3], ARGV[1])
return 1
"""
