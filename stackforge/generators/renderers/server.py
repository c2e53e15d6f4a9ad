"""Standalone Node.js server scaffolding (Express, Fastify or NestJS).

The server lives at the project root for ``express-api-only`` and under
``apps/api/`` in a monorepo. Only the API-only server wires in the API layer
files; the monorepo API app starts with health and hello endpoints.
"""

from stackforge.generators.context import RenderContext
from stackforge.generators.renderers import tooling
from stackforge.generators.renderers.contributions import Contribution, merge_all
from stackforge.generators.renderers.manifest import feature_contribution, package_json
from stackforge.generators.templating import registry
from stackforge.models.generation import GeneratedFile

TEMPLATES = {
    "server/express/index.ts": """\
import cors from 'cors';
import express from 'express';
import helmet from 'helmet';
[% if api == "rest" %]

import { usersRouter } from './routes/users';
[% elif api == "trpc" %]
import { createExpressMiddleware } from '@trpc/server/adapters/express';

import { createContext } from './trpc/context';
import { appRouter } from './trpc/router';
[% elif api == "graphql" %]
import { ApolloServer } from '@apollo/server';
import { expressMiddleware } from '@apollo/server/express4';

import { resolvers, typeDefs } from './graphql/schema';
[% endif %]

const app = express();
const port = Number(process.env.PORT ?? [[ port ]]);

app.use(helmet());
app.use(cors());
app.use(express.json());

app.get('/health', (_req, res) => {
  res.json({ status: 'ok', service: '[[ project_name ]]' });
});

app.get('/api/hello', (_req, res) => {
  res.json({ message: 'Hello from [[ display_name ]]' });
});
[% if api == "rest" %]

app.use('/api/users', usersRouter);
[% elif api == "trpc" %]

app.use('/trpc', createExpressMiddleware({ router: appRouter, createContext }));
[% endif %]

async function start() {
[% if api == "graphql" %]
  const apollo = new ApolloServer({ typeDefs, resolvers });
  await apollo.start();
  app.use('/graphql', expressMiddleware(apollo));

[% endif %]
  app.listen(port, () => {
    console.log(`[[ display_name ]] API listening on http://localhost:${port}`);
  });
}

start().catch((error) => {
  console.error(error);
  process.exit(1);
});
""",
    "server/fastify/index.ts": """\
import cors from '@fastify/cors';
import Fastify from 'fastify';
[% if api == "rest" %]

import { usersRoutes } from './routes/users';
[% elif api == "trpc" %]
import { fastifyTRPCPlugin } from '@trpc/server/adapters/fastify';

import { createContext } from './trpc/context';
import { appRouter } from './trpc/router';
[% elif api == "graphql" %]
import { ApolloServer } from '@apollo/server';
import fastifyApollo, { fastifyApolloDrainPlugin } from '@as-integrations/fastify';

import { resolvers, typeDefs } from './graphql/schema';
[% endif %]

const app = Fastify({ logger: true });
const port = Number(process.env.PORT ?? [[ port ]]);

app.get('/health', async () => ({ status: 'ok', service: '[[ project_name ]]' }));

app.get('/api/hello', async () => ({ message: 'Hello from [[ display_name ]]' }));

async function start() {
  await app.register(cors);
[% if api == "rest" %]
  await app.register(usersRoutes, { prefix: '/api/users' });
[% elif api == "trpc" %]
  await app.register(fastifyTRPCPlugin, {
    prefix: '/trpc',
    trpcOptions: { router: appRouter, createContext },
  });
[% elif api == "graphql" %]
  const apollo = new ApolloServer({
    typeDefs,
    resolvers,
    plugins: [fastifyApolloDrainPlugin(app)],
  });
  await apollo.start();
  await app.register(fastifyApollo(apollo));
[% endif %]
  await app.listen({ port, host: '0.0.0.0' });
}

start().catch((error) => {
  app.log.error(error);
  process.exit(1);
});
""",
    "server/nestjs/main.ts": """\
import { NestFactory } from '@nestjs/core';
[% if api == "trpc" %]
import { createExpressMiddleware } from '@trpc/server/adapters/express';
[% elif api == "graphql" %]
import { ApolloServer } from '@apollo/server';
import { expressMiddleware } from '@apollo/server/express4';
import { json } from 'express';
[% endif %]

import { AppModule } from './app.module';
[% if api == "trpc" %]
import { createContext } from './trpc/context';
import { appRouter } from './trpc/router';
[% elif api == "graphql" %]
import { resolvers, typeDefs } from './graphql/schema';
[% endif %]

async function bootstrap() {
  const app = await NestFactory.create(AppModule);
  app.enableCors();
[% if api == "trpc" %]
  app.use('/trpc', createExpressMiddleware({ router: appRouter, createContext }));
[% elif api == "graphql" %]
  const apollo = new ApolloServer({ typeDefs, resolvers });
  await apollo.start();
  app.use('/graphql', json(), expressMiddleware(apollo));
[% endif %]

  const port = Number(process.env.PORT ?? [[ port ]]);
  await app.listen(port);
  console.log(`[[ display_name ]] API listening on http://localhost:${port}`);
}

bootstrap();
""",
    "server/nestjs/app.module.ts": """\
import { Module } from '@nestjs/common';

import { AppController } from './app.controller';
[% if api == "rest" %]
import { UsersModule } from './users/users.module';
[% endif %]

@Module({
[% if api == "rest" %]
  imports: [UsersModule],
[% endif %]
  controllers: [AppController],
})
export class AppModule {}
""",
    "server/nestjs/app.controller.ts": """\
import { Controller, Get } from '@nestjs/common';

@Controller()
export class AppController {
  @Get('health')
  health() {
    return { status: 'ok', service: '[[ project_name ]]' };
  }

  @Get('api/hello')
  hello() {
    return { message: 'Hello from [[ display_name ]]' };
  }
}
""",
    "server/nest-cli.json": """\
{
  "$schema": "https://json.schemastore.org/nest-cli",
  "collection": "@nestjs/schematics",
  "sourceRoot": "src",
  "compilerOptions": {
    "deleteOutDir": true
  }
}
""",
}

registry.register_many(TEMPLATES)

SERVER_PORT = 4000

_FRAMEWORK_DEPENDENCIES = {
    "express": (
        {"express": "^4.21.1", "cors": "^2.8.5", "helmet": "^8.0.0"},
        {"@types/express": "^5.0.0", "@types/cors": "^2.8.17"},
    ),
    "fastify": (
        {"fastify": "^5.1.0", "@fastify/cors": "^10.0.1"},
        {},
    ),
    "nestjs": (
        {
            "@nestjs/common": "^10.4.8",
            "@nestjs/core": "^10.4.8",
            "@nestjs/platform-express": "^10.4.8",
            "reflect-metadata": "^0.2.2",
            "rxjs": "^7.8.1",
        },
        {"@nestjs/cli": "^10.4.8", "@nestjs/schematics": "^10.2.3"},
    ),
}

_SCRIPTS = {
    "express": {
        "dev": "tsx watch src/index.ts",
        "build": "tsc",
        "start": "node dist/index.js",
        "lint": "eslint .",
    },
    "fastify": {
        "dev": "tsx watch src/index.ts",
        "build": "tsc",
        "start": "node dist/index.js",
        "lint": "eslint .",
    },
    "nestjs": {
        "dev": "nest start --watch",
        "build": "nest build",
        "start": "node dist/main.js",
        "lint": "eslint .",
    },
}

_COMMON_DEV_DEPENDENCIES = {
    "@types/node": "^22.10.0",
    "tsx": "^4.19.2",
    "typescript": "^5.7.2",
}


def server_root(ctx: RenderContext) -> str:
    """Directory of the server package, with a trailing slash unless empty."""
    return "apps/api/" if ctx.is_monorepo else ""


def _api_style(ctx: RenderContext) -> str:
    """Which API layer the server entry mounts."""
    if not ctx.is_api_only:
        return "none"
    return "rest" if ctx.config.api.startswith("rest") else ctx.config.api


def _server_contribution(ctx: RenderContext) -> Contribution:
    framework = ctx.server_framework
    dependencies, dev_dependencies = _FRAMEWORK_DEPENDENCIES[framework]
    dependencies = dict(dependencies)
    api = _api_style(ctx)
    if api == "graphql" and framework == "fastify":
        dependencies["@as-integrations/fastify"] = "^2.1.1"
    if framework == "nestjs" and api == "graphql":
        dependencies["express"] = "^4.21.1"
    return Contribution(
        dependencies=dependencies,
        dev_dependencies={**_COMMON_DEV_DEPENDENCIES, **dev_dependencies},
        scripts=dict(_SCRIPTS[framework]),
    )


def render_server(ctx: RenderContext) -> list[GeneratedFile]:
    """Server package manifest and entry point."""
    root = server_root(ctx)
    framework = ctx.server_framework
    params = ctx.params(api=_api_style(ctx), port=SERVER_PORT)

    parts = [_server_contribution(ctx)]
    if ctx.is_api_only:
        parts += [feature_contribution(ctx), tooling.contribution(ctx)]
    manifest = merge_all(parts)
    name = "@repo/api" if ctx.is_monorepo else ctx.project_name

    files = [
        ctx.file(
            f"{root}package.json",
            package_json(name, {}, manifest, main="dist/index.js" if framework != "nestjs" else "dist/main.js"),
            "config",
        )
    ]

    if framework == "nestjs":
        files += [
            ctx.file(f"{root}src/main.ts", registry.render("server/nestjs/main.ts", **params)),
            ctx.file(f"{root}src/app.module.ts", registry.render("server/nestjs/app.module.ts", **params)),
            ctx.file(
                f"{root}src/app.controller.ts",
                registry.render("server/nestjs/app.controller.ts", **params),
            ),
            ctx.file(f"{root}nest-cli.json", registry.render("server/nest-cli.json"), "config"),
        ]
    else:
        files.append(
            ctx.file(f"{root}src/index.ts", registry.render(f"server/{framework}/index.ts", **params))
        )

    return files
