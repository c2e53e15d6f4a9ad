"""API layer integration files.

Next.js hosts get route handlers plus a typed client; standalone API servers
get server-side routers only.
"""

from stackforge.generators.context import RenderContext
from stackforge.generators.renderers.contributions import Contribution, Provider
from stackforge.generators.templating import registry
from stackforge.models.generation import GeneratedFile

TEMPLATES = {
    "api/rest/api-client.ts": """\
[% if axios %]
import axios from 'axios';

export const apiClient = axios.create({
  baseURL: process.env.NEXT_PUBLIC_API_URL ?? '/api',
  headers: { 'Content-Type': 'application/json' },
});

export async function get<T>(path: string): Promise<T> {
  const { data } = await apiClient.get<T>(path);
  return data;
}

export async function post<T>(path: string, body: unknown): Promise<T> {
  const { data } = await apiClient.post<T>(path, body);
  return data;
}

export async function del(path: string): Promise<void> {
  await apiClient.delete(path);
}
[% else %]
const BASE_URL = process.env.NEXT_PUBLIC_API_URL ?? '/api';

export class ApiError extends Error {
  constructor(public status: number, message: string) {
    super(message);
  }
}

async function request<T>(path: string, init?: RequestInit): Promise<T> {
  const response = await fetch(`${BASE_URL}${path}`, {
    ...init,
    headers: { 'Content-Type': 'application/json', ...init?.headers },
  });
  if (!response.ok) {
    throw new ApiError(response.status, await response.text());
  }
  if (response.status === 204) {
    return undefined as T;
  }
  return (await response.json()) as T;
}

export const get = <T>(path: string) => request<T>(path);
export const post = <T>(path: string, body: unknown) =>
  request<T>(path, { method: 'POST', body: JSON.stringify(body) });
export const del = (path: string) => request<void>(path, { method: 'DELETE' });
[% endif %]
""",
    "api/rest/users.ts": """\
import { NextResponse } from 'next/server';

export type User = { id: string; name: string; email: string };

export const users: User[] = [
  { id: '1', name: 'Ada Lovelace', email: 'ada@example.com' },
  { id: '2', name: 'Alan Turing', email: 'alan@example.com' },
];

export async function GET() {
  return NextResponse.json(users);
}

export async function POST(request: Request) {
  const body = (await request.json()) as Partial<User>;
  if (!body.name || !body.email) {
    return NextResponse.json({ error: 'name and email are required' }, { status: 400 });
  }
  const user = { id: String(users.length + 1), name: body.name, email: body.email };
  users.push(user);
  return NextResponse.json(user, { status: 201 });
}
""",
    "api/rest/user.ts": """\
import { NextResponse } from 'next/server';

import { users } from '../route';

type Params = { params: Promise<{ id: string }> };

export async function GET(_request: Request, { params }: Params) {
  const { id } = await params;
  const user = users.find((candidate) => candidate.id === id);
  if (!user) {
    return NextResponse.json({ error: 'Not found' }, { status: 404 });
  }
  return NextResponse.json(user);
}

export async function DELETE(_request: Request, { params }: Params) {
  const { id } = await params;
  const index = users.findIndex((candidate) => candidate.id === id);
  if (index === -1) {
    return NextResponse.json({ error: 'Not found' }, { status: 404 });
  }
  users.splice(index, 1);
  return new NextResponse(null, { status: 204 });
}
""",
    "api/trpc/router.ts": """\
import { initTRPC } from '@trpc/server';
import superjson from 'superjson';
import { z } from 'zod';

const t = initTRPC.create({ transformer: superjson });

const users = [
  { id: '1', name: 'Ada Lovelace' },
  { id: '2', name: 'Alan Turing' },
];

export const appRouter = t.router({
  hello: t.procedure
    .input(z.object({ name: z.string().optional() }))
    .query(({ input }) => ({ greeting: `Hello from [[ display_name ]], ${input.name ?? 'world'}` })),
  users: t.router({
    list: t.procedure.query(() => users),
    create: t.procedure.input(z.object({ name: z.string().min(1) })).mutation(({ input }) => {
      const user = { id: String(users.length + 1), name: input.name };
      users.push(user);
      return user;
    }),
  }),
});

export type AppRouter = typeof appRouter;
""",
    "api/trpc/route.ts": """\
import { fetchRequestHandler } from '@trpc/server/adapters/fetch';

import { appRouter } from '@/lib/trpc/router';

const handler = (request: Request) =>
  fetchRequestHandler({
    endpoint: '/api/trpc',
    req: request,
    router: appRouter,
    createContext: () => ({}),
  });

export { handler as GET, handler as POST };
""",
    "api/trpc/client.ts": """\
import { createTRPCReact } from '@trpc/react-query';

import type { AppRouter } from './router';

export const trpc = createTRPCReact<AppRouter>();
""",
    "api/trpc/provider.tsx": """\
'use client';

import { QueryClient, QueryClientProvider } from '@tanstack/react-query';
import { httpBatchLink } from '@trpc/client';
import { useState, type ReactNode } from 'react';
import superjson from 'superjson';

import { trpc } from './client';

export function TRPCProvider({ children }: { children: ReactNode }) {
  const [queryClient] = useState(() => new QueryClient());
  const [trpcClient] = useState(() =>
    trpc.createClient({
      links: [httpBatchLink({ url: '/api/trpc', transformer: superjson })],
    })
  );

  return (
    <trpc.Provider client={trpcClient} queryClient={queryClient}>
      <QueryClientProvider client={queryClient}>{children}</QueryClientProvider>
    </trpc.Provider>
  );
}
""",
    "api/trpc/users-page.tsx": """\
'use client';

import { trpc } from '@/lib/trpc/client';

export default function UsersPage() {
  const users = trpc.users.list.useQuery();

  return (
    <main className="mx-auto max-w-2xl p-8">
      <h1 className="mb-4 text-2xl font-bold">Users</h1>
      {users.isLoading ? <p>Loading...</p> : null}
      <ul className="space-y-2">
        {users.data?.map((user) => (
          <li key={user.id} className="rounded border p-3">
            {user.name}
          </li>
        ))}
      </ul>
    </main>
  );
}
""",
    "api/graphql/schema.ts": """\
export const typeDefs = `#graphql
  type User {
    id: ID!
    name: String!
    email: String!
  }

  type Query {
    users: [User!]!
    user(id: ID!): User
  }

  type Mutation {
    createUser(name: String!, email: String!): User!
  }
`;

const users = [
  { id: '1', name: 'Ada Lovelace', email: 'ada@example.com' },
  { id: '2', name: 'Alan Turing', email: 'alan@example.com' },
];

export const resolvers = {
  Query: {
    users: () => users,
    user: (_: unknown, { id }: { id: string }) => users.find((user) => user.id === id),
  },
  Mutation: {
    createUser: (_: unknown, { name, email }: { name: string; email: string }) => {
      const user = { id: String(users.length + 1), name, email };
      users.push(user);
      return user;
    },
  },
};
""",
    "api/graphql/route.ts": """\
import { ApolloServer } from '@apollo/server';
import { startServerAndCreateNextHandler } from '@as-integrations/next';
import type { NextRequest } from 'next/server';

import { resolvers, typeDefs } from '@/lib/graphql/schema';

const server = new ApolloServer({ typeDefs, resolvers });

const handler = startServerAndCreateNextHandler<NextRequest>(server);

export { handler as GET, handler as POST };
""",
    "api/graphql/client.ts": """\
import { ApolloClient, InMemoryCache } from '@apollo/client';

export const apolloClient = new ApolloClient({
  uri: '/api/graphql',
  cache: new InMemoryCache(),
});
""",
    "api/graphql/provider.tsx": """\
'use client';

import { ApolloProvider } from '@apollo/client';
import type { ReactNode } from 'react';

import { apolloClient } from './client';

export function GraphQLProvider({ children }: { children: ReactNode }) {
  return <ApolloProvider client={apolloClient}>{children}</ApolloProvider>;
}
""",
    "api/graphql/queries.ts": """\
import { gql } from '@apollo/client';

export const GET_USERS = gql`
  query GetUsers {
    users {
      id
      name
      email
    }
  }
`;

export const CREATE_USER = gql`
  mutation CreateUser($name: String!, $email: String!) {
    createUser(name: $name, email: $email) {
      id
      name
    }
  }
`;
""",
    "api/graphql/users-page.tsx": """\
'use client';

import { useQuery } from '@apollo/client';

import { GET_USERS } from '@/lib/graphql/queries';

type User = { id: string; name: string; email: string };

export default function UsersPage() {
  const { data, loading, error } = useQuery<{ users: User[] }>(GET_USERS);

  return (
    <main className="mx-auto max-w-2xl p-8">
      <h1 className="mb-4 text-2xl font-bold">Users</h1>
      {loading ? <p>Loading...</p> : null}
      {error ? <p className="text-red-600">{error.message}</p> : null}
      <ul className="space-y-2">
        {data?.users.map((user) => (
          <li key={user.id} className="rounded border p-3">
            {user.name} <span className="text-gray-500">{user.email}</span>
          </li>
        ))}
      </ul>
    </main>
  );
}
""",
    "api/server/express-users.ts": """\
import { Router } from 'express';

type User = { id: string; name: string; email: string };

const users: User[] = [{ id: '1', name: 'Ada Lovelace', email: 'ada@example.com' }];

export const usersRouter = Router();

usersRouter.get('/', (_req, res) => {
  res.json(users);
});

usersRouter.get('/:id', (req, res) => {
  const user = users.find((candidate) => candidate.id === req.params.id);
  if (!user) {
    res.status(404).json({ error: 'Not found' });
    return;
  }
  res.json(user);
});

usersRouter.post('/', (req, res) => {
  const { name, email } = req.body as Partial<User>;
  if (!name || !email) {
    res.status(400).json({ error: 'name and email are required' });
    return;
  }
  const user = { id: String(users.length + 1), name, email };
  users.push(user);
  res.status(201).json(user);
});
""",
    "api/server/fastify-users.ts": """\
import type { FastifyPluginAsync } from 'fastify';

type User = { id: string; name: string; email: string };

const users: User[] = [{ id: '1', name: 'Ada Lovelace', email: 'ada@example.com' }];

export const usersRoutes: FastifyPluginAsync = async (app) => {
  app.get('/', async () => users);

  app.get<{ Params: { id: string } }>('/:id', async (request, reply) => {
    const user = users.find((candidate) => candidate.id === request.params.id);
    if (!user) {
      return reply.code(404).send({ error: 'Not found' });
    }
    return user;
  });

  app.post<{ Body: Omit<User, 'id'> }>('/', async (request, reply) => {
    const user = { id: String(users.length + 1), ...request.body };
    users.push(user);
    return reply.code(201).send(user);
  });
};
""",
    "api/server/nest-users-controller.ts": """\
import { Body, Controller, Get, NotFoundException, Param, Post } from '@nestjs/common';

type User = { id: string; name: string; email: string };

@Controller('users')
export class UsersController {
  private readonly users: User[] = [{ id: '1', name: 'Ada Lovelace', email: 'ada@example.com' }];

  @Get()
  findAll(): User[] {
    return this.users;
  }

  @Get(':id')
  findOne(@Param('id') id: string): User {
    const user = this.users.find((candidate) => candidate.id === id);
    if (!user) {
      throw new NotFoundException();
    }
    return user;
  }

  @Post()
  create(@Body() body: Omit<User, 'id'>): User {
    const user = { id: String(this.users.length + 1), ...body };
    this.users.push(user);
    return user;
  }
}
""",
    "api/server/nest-users-module.ts": """\
import { Module } from '@nestjs/common';

import { UsersController } from './users.controller';

@Module({
  controllers: [UsersController],
})
export class UsersModule {}
""",
    "api/server/trpc-context.ts": """\
export function createContext() {
  return { requestedAt: new Date() };
}

export type Context = ReturnType<typeof createContext>;
""",
}

registry.register_many(TEMPLATES)


def applies(ctx: RenderContext) -> bool:
    return not ctx.is_spa


def api_routes(ctx: RenderContext) -> list[str]:
    """URL paths served by the files this renderer emits."""
    if not applies(ctx):
        return []
    api = ctx.config.api
    if ctx.is_api_only:
        return {
            "rest-fetch": ["/api/users", "/api/users/:id"],
            "rest-axios": ["/api/users", "/api/users/:id"],
            "trpc": ["/trpc"],
            "graphql": ["/graphql"],
        }[api]
    return {
        "rest-fetch": ["/api/users", "/api/users/[id]"],
        "rest-axios": ["/api/users", "/api/users/[id]"],
        "trpc": ["/api/trpc/[trpc]"],
        "graphql": ["/api/graphql"],
    }[api]


def contribution(ctx: RenderContext) -> Contribution:
    if not applies(ctx):
        return Contribution()
    api = ctx.config.api
    if ctx.is_api_only:
        if api == "trpc":
            return Contribution(
                dependencies={"@trpc/server": "^11.0.0-rc.648", "zod": "^3.23.8", "superjson": "^2.2.1"}
            )
        if api == "graphql":
            return Contribution(dependencies={"@apollo/server": "^4.11.2", "graphql": "^16.9.0"})
        return Contribution()
    if api == "rest-axios":
        return Contribution(dependencies={"axios": "^1.7.8"})
    if api == "trpc":
        return Contribution(
            dependencies={
                "@trpc/server": "^11.0.0-rc.648",
                "@trpc/client": "^11.0.0-rc.648",
                "@trpc/react-query": "^11.0.0-rc.648",
                "@tanstack/react-query": "^5.62.0",
                "superjson": "^2.2.1",
                "zod": "^3.23.8",
            },
            providers=[
                Provider(
                    import_line="import { TRPCProvider } from '@/lib/trpc/provider';",
                    open_tag="<TRPCProvider>",
                    close_tag="</TRPCProvider>",
                    order=30,
                )
            ],
        )
    if api == "graphql":
        return Contribution(
            dependencies={
                "@apollo/client": "^3.11.10",
                "@apollo/server": "^4.11.2",
                "@as-integrations/next": "^3.2.0",
                "graphql": "^16.9.0",
            },
            providers=[
                Provider(
                    import_line="import { GraphQLProvider } from '@/lib/graphql/provider';",
                    open_tag="<GraphQLProvider>",
                    close_tag="</GraphQLProvider>",
                    order=30,
                )
            ],
        )
    return Contribution()


def render_api_layer(ctx: RenderContext) -> list[GeneratedFile]:
    """Client, route handlers and example pages for the API style."""
    if not applies(ctx):
        return []
    if ctx.is_api_only:
        return _render_server_api(ctx)

    api = ctx.config.api
    params = ctx.params(axios=api == "rest-axios")

    if api in ("rest-fetch", "rest-axios"):
        return [
            ctx.file(ctx.src("lib/api-client.ts"), registry.render("api/rest/api-client.ts", **params)),
            ctx.file(ctx.src("app/api/users/route.ts"), registry.render("api/rest/users.ts")),
            ctx.file(ctx.src("app/api/users/[id]/route.ts"), registry.render("api/rest/user.ts")),
        ]

    if api == "trpc":
        return [
            ctx.file(ctx.src("lib/trpc/router.ts"), registry.render("api/trpc/router.ts", **params)),
            ctx.file(ctx.src("app/api/trpc/[trpc]/route.ts"), registry.render("api/trpc/route.ts")),
            ctx.file(ctx.src("lib/trpc/client.ts"), registry.render("api/trpc/client.ts")),
            ctx.file(ctx.src("lib/trpc/provider.tsx"), registry.render("api/trpc/provider.tsx")),
            ctx.file(ctx.src("app/users/page.tsx"), registry.render("api/trpc/users-page.tsx")),
        ]

    if api == "graphql":
        return [
            ctx.file(ctx.src("lib/graphql/schema.ts"), registry.render("api/graphql/schema.ts")),
            ctx.file(ctx.src("app/api/graphql/route.ts"), registry.render("api/graphql/route.ts")),
            ctx.file(ctx.src("lib/graphql/client.ts"), registry.render("api/graphql/client.ts")),
            ctx.file(ctx.src("lib/graphql/provider.tsx"), registry.render("api/graphql/provider.tsx")),
            ctx.file(ctx.src("lib/graphql/queries.ts"), registry.render("api/graphql/queries.ts")),
            ctx.file(ctx.src("app/users/page.tsx"), registry.render("api/graphql/users-page.tsx")),
        ]

    raise ValueError(f"Unsupported API layer: {api}")


def _render_server_api(ctx: RenderContext) -> list[GeneratedFile]:
    api = ctx.config.api
    framework = ctx.server_framework

    if api in ("rest-fetch", "rest-axios"):
        if framework == "nestjs":
            return [
                ctx.file(
                    ctx.src("users/users.controller.ts"),
                    registry.render("api/server/nest-users-controller.ts"),
                ),
                ctx.file(
                    ctx.src("users/users.module.ts"),
                    registry.render("api/server/nest-users-module.ts"),
                ),
            ]
        template = "api/server/fastify-users.ts" if framework == "fastify" else "api/server/express-users.ts"
        return [ctx.file(ctx.src("routes/users.ts"), registry.render(template))]

    if api == "trpc":
        return [
            ctx.file(ctx.src("trpc/router.ts"), registry.render("api/trpc/router.ts", **ctx.params())),
            ctx.file(ctx.src("trpc/context.ts"), registry.render("api/server/trpc-context.ts")),
        ]

    if api == "graphql":
        return [ctx.file(ctx.src("graphql/schema.ts"), registry.render("api/graphql/schema.ts"))]

    raise ValueError(f"Unsupported API layer: {api}")
