"""Redis caching helpers, emitted when the redis extra is enabled."""

from stackforge.generators.context import RenderContext
from stackforge.generators.renderers.contributions import Contribution
from stackforge.generators.templating import registry
from stackforge.models.generation import GeneratedFile

TEMPLATES = {
    "redis/client.ts": """\
import Redis from 'ioredis';

const globalForRedis = globalThis as unknown as { redis?: Redis };

export const redis =
  globalForRedis.redis ??
  new Redis(process.env.REDIS_URL ?? 'redis://localhost:6379', {
    maxRetriesPerRequest: 3,
    lazyConnect: true,
  });

if (process.env.NODE_ENV !== 'production') {
  globalForRedis.redis = redis;
}
""",
    "redis/helpers.ts": """\
import { redis } from './redis-client';

const PREFIX = '[[ project_name ]]:';

export async function getCached<T>(key: string): Promise<T | null> {
  const raw = await redis.get(PREFIX + key);
  return raw ? (JSON.parse(raw) as T) : null;
}

export async function setCached<T>(key: string, value: T, ttlSeconds = 300): Promise<void> {
  await redis.set(PREFIX + key, JSON.stringify(value), 'EX', ttlSeconds);
}

export async function invalidate(key: string): Promise<void> {
  await redis.del(PREFIX + key);
}

export async function withCache<T>(
  key: string,
  loader: () => Promise<T>,
  ttlSeconds = 300
): Promise<T> {
  const cached = await getCached<T>(key);
  if (cached !== null) {
    return cached;
  }
  const value = await loader();
  await setCached(key, value, ttlSeconds);
  return value;
}
""",
    "redis/examples.ts": """\
import { invalidate, withCache } from './cache-helpers';

type Stats = { users: number; generatedAt: string };

async function loadStats(): Promise<Stats> {
  return { users: 0, generatedAt: new Date().toISOString() };
}

export function getDashboardStats() {
  return withCache('dashboard:stats', loadStats, 60);
}

export function refreshDashboardStats() {
  return invalidate('dashboard:stats');
}
""",
}

registry.register_many(TEMPLATES)


def applies(ctx: RenderContext) -> bool:
    return ctx.config.extras.redis


def contribution(ctx: RenderContext) -> Contribution:
    if not applies(ctx):
        return Contribution()
    return Contribution(dependencies={"ioredis": "^5.4.1"})


def render_redis(ctx: RenderContext) -> list[GeneratedFile]:
    if not applies(ctx):
        return []
    return [
        ctx.file(ctx.src("lib/redis-client.ts"), registry.render("redis/client.ts")),
        ctx.file(ctx.src("lib/cache-helpers.ts"), registry.render("redis/helpers.ts", **ctx.params())),
        ctx.file(ctx.src("lib/cache-examples.ts"), registry.render("redis/examples.ts")),
    ]
