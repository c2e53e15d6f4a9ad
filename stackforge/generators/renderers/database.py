"""Database and ORM integration files."""

from stackforge.generators.context import RenderContext
from stackforge.generators.renderers import auth
from stackforge.generators.renderers.contributions import Contribution
from stackforge.generators.renderers.supabase import (
    SUPABASE_DEPENDENCIES,
    render_supabase_core,
)
from stackforge.generators.templating import registry
from stackforge.models.generation import GeneratedFile

TEMPLATES = {
    "database/prisma/schema.prisma": """\
// [[ display_name ]] database schema
// Docs: https://pris.ly/d/prisma-schema

generator client {
  provider = "prisma-client-js"
}

datasource db {
  provider = "postgresql"
  url      = env("DATABASE_URL")
}

model User {
  id        String   @id @default(cuid())
  email     String   @unique
  name      String?
  items     Item[]
  createdAt DateTime @default(now())
  updatedAt DateTime @updatedAt
}

model Item {
  id        String   @id @default(cuid())
  title     String
  completed Boolean  @default(false)
  owner     User     @relation(fields: [ownerId], references: [id], onDelete: Cascade)
  ownerId   String
  createdAt DateTime @default(now())

  @@index([ownerId])
}
""",
    "database/prisma/client.ts": """\
import { PrismaClient } from '@prisma/client';

const globalForPrisma = globalThis as unknown as { prisma?: PrismaClient };

export const prisma =
  globalForPrisma.prisma ??
  new PrismaClient({
    log: process.env.NODE_ENV === 'development' ? ['query', 'error', 'warn'] : ['error'],
  });

if (process.env.NODE_ENV !== 'production') {
  globalForPrisma.prisma = prisma;
}
""",
    "database/prisma/queries.ts": """\
import { prisma } from './prisma';

export async function listItems(ownerId: string) {
  return prisma.item.findMany({
    where: { ownerId },
    orderBy: { createdAt: 'desc' },
  });
}

export async function createItem(ownerId: string, title: string) {
  return prisma.item.create({ data: { ownerId, title } });
}

export async function toggleItem(id: string, completed: boolean) {
  return prisma.item.update({ where: { id }, data: { completed } });
}

export async function deleteItem(id: string) {
  return prisma.item.delete({ where: { id } });
}
""",
    "database/drizzle/schema.ts": """\
import { boolean, pgTable, text, timestamp, uuid } from 'drizzle-orm/pg-core';

export const users = pgTable('users', {
  id: uuid('id').primaryKey().defaultRandom(),
  email: text('email').notNull().unique(),
  name: text('name'),
  createdAt: timestamp('created_at').notNull().defaultNow(),
});

export const items = pgTable('items', {
  id: uuid('id').primaryKey().defaultRandom(),
  title: text('title').notNull(),
  completed: boolean('completed').notNull().default(false),
  ownerId: uuid('owner_id')
    .notNull()
    .references(() => users.id, { onDelete: 'cascade' }),
  createdAt: timestamp('created_at').notNull().defaultNow(),
});

export type User = typeof users.$inferSelect;
export type Item = typeof items.$inferSelect;
""",
    "database/drizzle/db.ts": """\
import { drizzle } from 'drizzle-orm/postgres-js';
import postgres from 'postgres';

import * as schema from './schema';

const client = postgres(process.env.DATABASE_URL!, { max: 10 });

export const db = drizzle(client, { schema });
""",
    "database/drizzle/queries.ts": """\
import { desc, eq } from 'drizzle-orm';

import { db } from './db';
import { items } from './schema';

export async function listItems(ownerId: string) {
  return db.select().from(items).where(eq(items.ownerId, ownerId)).orderBy(desc(items.createdAt));
}

export async function createItem(ownerId: string, title: string) {
  const [item] = await db.insert(items).values({ ownerId, title }).returning();
  return item;
}

export async function deleteItem(id: string) {
  await db.delete(items).where(eq(items.id, id));
}
""",
    "database/drizzle/config.ts": """\
import { defineConfig } from 'drizzle-kit';

export default defineConfig({
  schema: './[[ base ]]/lib/db/schema.ts',
  out: './drizzle',
  dialect: 'postgresql',
  dbCredentials: {
    url: process.env.DATABASE_URL!,
  },
});
""",
    "database/supabase/queries.ts": """\
import { createClient } from './supabase-server';

export async function listItems() {
  const supabase = await createClient();
  const { data, error } = await supabase
    .from('items')
    .select('*')
    .order('created_at', { ascending: false });
  if (error) throw error;
  return data;
}

export async function createItem(title: string) {
  const supabase = await createClient();
  const { data, error } = await supabase.from('items').insert({ title }).select().single();
  if (error) throw error;
  return data;
}

export async function deleteItem(id: string) {
  const supabase = await createClient();
  const { error } = await supabase.from('items').delete().eq('id', id);
  if (error) throw error;
}
""",
    "database/mongodb/client.ts": """\
import { MongoClient } from 'mongodb';

const uri = process.env.MONGODB_URI;
if (!uri) {
  throw new Error('MONGODB_URI is not set');
}

const globalForMongo = globalThis as unknown as { mongoClient?: Promise<MongoClient> };

export const clientPromise =
  globalForMongo.mongoClient ?? new MongoClient(uri).connect();

if (process.env.NODE_ENV !== 'production') {
  globalForMongo.mongoClient = clientPromise;
}

export async function getDb() {
  const client = await clientPromise;
  return client.db('[[ project_name | snake_case ]]');
}
""",
    "database/mongodb/queries.ts": """\
import { ObjectId } from 'mongodb';

import { getDb } from './mongodb';

type Item = { _id?: ObjectId; ownerId: string; title: string; completed: boolean; createdAt: Date };

export async function listItems(ownerId: string) {
  const db = await getDb();
  return db.collection<Item>('items').find({ ownerId }).sort({ createdAt: -1 }).toArray();
}

export async function createItem(ownerId: string, title: string) {
  const db = await getDb();
  const item: Item = { ownerId, title, completed: false, createdAt: new Date() };
  const result = await db.collection<Item>('items').insertOne(item);
  return { ...item, _id: result.insertedId };
}

export async function deleteItem(id: string) {
  const db = await getDb();
  await db.collection<Item>('items').deleteOne({ _id: new ObjectId(id) });
}
""",
    "database/migrate.sh": """\
#!/usr/bin/env bash
# Apply database migrations for [[ display_name ]]
set -euo pipefail

if [ -z "${DATABASE_URL:-}" ]; then
  echo "DATABASE_URL is not set" >&2
  exit 1
fi

[[ command ]]
""",
}

registry.register_many(TEMPLATES)

_MIGRATE_COMMANDS = {
    "prisma-postgres": "npx prisma migrate deploy",
    "drizzle-postgres": "npx drizzle-kit migrate",
}


def applies(ctx: RenderContext) -> bool:
    return ctx.config.database != "none"


def contribution(ctx: RenderContext) -> Contribution:
    database = ctx.config.database
    if database == "prisma-postgres":
        return Contribution(
            dependencies={"@prisma/client": "^5.22.0"},
            dev_dependencies={"prisma": "^5.22.0"},
            scripts={
                "db:generate": "prisma generate",
                "db:migrate": "prisma migrate dev",
                "db:studio": "prisma studio",
            },
        )
    if database == "drizzle-postgres":
        return Contribution(
            dependencies={"drizzle-orm": "^0.36.4", "postgres": "^3.4.5"},
            dev_dependencies={"drizzle-kit": "^0.28.1"},
            scripts={
                "db:generate": "drizzle-kit generate",
                "db:migrate": "drizzle-kit migrate",
                "db:studio": "drizzle-kit studio",
            },
        )
    if database == "supabase":
        return Contribution(dependencies=dict(SUPABASE_DEPENDENCIES))
    if database == "mongodb":
        return Contribution(dependencies={"mongodb": "^6.11.0"})
    return Contribution()


def render_database(ctx: RenderContext) -> list[GeneratedFile]:
    """Schema, client and query helpers for the selected database."""
    database = ctx.config.database
    params = ctx.params(base=ctx.base)

    if database == "none":
        return []

    if database == "prisma-postgres":
        return [
            ctx.file(
                ctx.web("prisma/schema.prisma"),
                registry.render("database/prisma/schema.prisma", **params),
                "config",
            ),
            ctx.file(ctx.src("lib/prisma.ts"), registry.render("database/prisma/client.ts")),
            ctx.file(ctx.src("lib/db-queries.ts"), registry.render("database/prisma/queries.ts")),
            _migrate_script(ctx, database),
        ]

    if database == "drizzle-postgres":
        return [
            ctx.file(ctx.src("lib/db/schema.ts"), registry.render("database/drizzle/schema.ts")),
            ctx.file(ctx.src("lib/db/db.ts"), registry.render("database/drizzle/db.ts")),
            ctx.file(ctx.src("lib/db/queries.ts"), registry.render("database/drizzle/queries.ts")),
            ctx.file(
                ctx.web("drizzle.config.ts"),
                registry.render("database/drizzle/config.ts", base="src"),
                "config",
            ),
            _migrate_script(ctx, database),
        ]

    if database == "supabase":
        files = [] if auth.emits_supabase_client(ctx) else render_supabase_core(ctx)
        files.append(
            ctx.file(ctx.src("lib/db-queries.ts"), registry.render("database/supabase/queries.ts"))
        )
        return files

    if database == "mongodb":
        return [
            ctx.file(ctx.src("lib/mongodb.ts"), registry.render("database/mongodb/client.ts", **params)),
            ctx.file(ctx.src("lib/db-queries.ts"), registry.render("database/mongodb/queries.ts")),
        ]

    raise ValueError(f"Unsupported database: {database}")


def _migrate_script(ctx: RenderContext, database: str) -> GeneratedFile:
    return ctx.file(
        ctx.web("scripts/migrate.sh"),
        registry.render(
            "database/migrate.sh",
            **ctx.params(command=_MIGRATE_COMMANDS[database]),
        ),
        "script",
    )
