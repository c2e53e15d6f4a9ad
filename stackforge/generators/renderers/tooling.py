"""Tooling and deployment configuration files."""

import json
from dataclasses import dataclass

from stackforge.generators.context import RenderContext
from stackforge.generators.renderers.contributions import Contribution
from stackforge.generators.templating import registry
from stackforge.models.generation import GeneratedFile

PRETTIER_CONFIG = {
    "semi": True,
    "trailingComma": "es5",
    "singleQuote": True,
    "printWidth": 80,
    "tabWidth": 2,
    "useTabs": False,
}

TEMPLATES = {
    "tooling/tsconfig.next.json": """\
{
  "compilerOptions": {
    "target": "ES2017",
    "lib": ["dom", "dom.iterable", "esnext"],
    "allowJs": true,
    "skipLibCheck": true,
    "strict": true,
    "noEmit": true,
    "esModuleInterop": true,
    "module": "esnext",
    "moduleResolution": "bundler",
    "resolveJsonModule": true,
    "isolatedModules": true,
    "jsx": "preserve",
    "incremental": true,
    "plugins": [{ "name": "next" }],
    "paths": {
      "@/*": ["./src/*"]
    }
  },
  "include": ["next-env.d.ts", "**/*.ts", "**/*.tsx", ".next/types/**/*.ts"],
  "exclude": ["node_modules"]
}
""",
    "tooling/tsconfig.server.json": """\
{
  "compilerOptions": {
    "target": "ES2022",
    "module": "commonjs",
    "lib": ["ES2022"],
    "outDir": "./dist",
    "rootDir": "./src",
    "strict": true,
    "esModuleInterop": true,
    "skipLibCheck": true,
    "forceConsistentCasingInFileNames": true,
    "resolveJsonModule": true,
[% if decorators %]
    "experimentalDecorators": true,
    "emitDecoratorMetadata": true,
[% endif %]
    "sourceMap": true
  },
  "include": ["src/**/*"],
  "exclude": ["node_modules", "dist"]
}
""",
    "tooling/tsconfig.spa.json": """\
{
  "compilerOptions": {
    "target": "ES2020",
    "useDefineForClassFields": true,
    "lib": ["ES2020", "DOM", "DOM.Iterable"],
    "module": "ESNext",
    "skipLibCheck": true,
    "moduleResolution": "bundler",
    "resolveJsonModule": true,
    "isolatedModules": true,
    "noEmit": true,
[% if jsx %]
    "jsx": "react-jsx",
[% endif %]
[% if decorators %]
    "experimentalDecorators": true,
[% endif %]
    "strict": true
  },
  "include": ["src"]
}
""",
    "tooling/tsconfig.base.json": """\
{
  "compilerOptions": {
    "target": "ES2022",
    "strict": true,
    "esModuleInterop": true,
    "skipLibCheck": true,
    "forceConsistentCasingInFileNames": true,
    "resolveJsonModule": true
  },
  "exclude": ["node_modules"]
}
""",
    "tooling/eslint.next.mjs": """\
import { dirname } from 'path';
import { fileURLToPath } from 'url';
import { FlatCompat } from '@eslint/eslintrc';

const __filename = fileURLToPath(import.meta.url);
const __dirname = dirname(__filename);

const compat = new FlatCompat({ baseDirectory: __dirname });

const eslintConfig = [...compat.extends('next/core-web-vitals', 'next/typescript')];

export default eslintConfig;
""",
    "tooling/eslint.ts.mjs": """\
import js from '@eslint/js';
import tseslint from 'typescript-eslint';

export default tseslint.config(
  { ignores: ['dist', 'node_modules', '.turbo'] },
  js.configs.recommended,
  ...tseslint.configs.recommended,
  {
    rules: {
      '@typescript-eslint/no-unused-vars': ['warn', { argsIgnorePattern: '^_' }],
    },
  }
);
""",
    "tooling/prettierignore": """\
node_modules
.next
dist
build
coverage
.turbo
*.lock
package-lock.json
""",
    "tooling/husky-pre-commit": """\
npx lint-staged
""",
    "tooling/husky-commit-msg": """\
npx --no -- commitlint --edit "$1"
""",
    "tooling/commitlint.config.js": """\
module.exports = {
  extends: ['@commitlint/config-conventional'],
};
""",
    "tooling/Dockerfile": """\
[% if kind == "next" %]
FROM node:20-alpine AS deps
WORKDIR /app
COPY package*.json ./
RUN npm ci

FROM node:20-alpine AS builder
WORKDIR /app
COPY --from=deps /app/node_modules ./node_modules
COPY . .
RUN npm run build

FROM node:20-alpine AS runner
WORKDIR /app
ENV NODE_ENV=production
COPY --from=builder /app/package*.json ./
COPY --from=builder /app/node_modules ./node_modules
COPY --from=builder /app/.next ./.next
COPY --from=builder /app/public ./public
EXPOSE 3000
CMD ["npm", "run", "start"]
[% elif kind == "monorepo" %]
FROM node:20-alpine AS builder
WORKDIR /app
COPY . .
RUN npm ci && npx turbo run build

FROM node:20-alpine AS runner
WORKDIR /app
ENV NODE_ENV=production
COPY --from=builder /app ./
EXPOSE 3000 4000
CMD ["npx", "turbo", "run", "start"]
[% elif kind == "spa" %]
FROM node:20-alpine AS builder
WORKDIR /app
COPY package*.json ./
RUN npm ci
COPY . .
RUN npm run build

FROM nginx:1.27-alpine
COPY --from=builder /app/dist /usr/share/nginx/html
EXPOSE 80
CMD ["nginx", "-g", "daemon off;"]
[% else %]
FROM node:20-alpine AS builder
WORKDIR /app
COPY package*.json ./
RUN npm ci
COPY . .
RUN npm run build

FROM node:20-alpine AS runner
WORKDIR /app
ENV NODE_ENV=production
COPY package*.json ./
RUN npm ci --omit=dev
COPY --from=builder /app/dist ./dist
EXPOSE [[ port ]]
CMD ["node", "[[ entry ]]"]
[% endif %]
""",
    "tooling/dockerignore": """\
node_modules
npm-debug.log
.next
dist
.git
.env
.env.local
*.md
""",
    "tooling/docker-compose.yml": """\
services:
  app:
    build: .
    ports:
      - "[[ host_port ]]:[[ container_port ]]"
    env_file:
      - .env
[% if services %]
    depends_on:
[% for service in services %]
      - [[ service ]]
[% endfor %]
[% endif %]
[% if "postgres" in services %]

  postgres:
    image: postgres:16-alpine
    environment:
      POSTGRES_USER: postgres
      POSTGRES_PASSWORD: postgres
      POSTGRES_DB: [[ project_name | snake_case ]]
    ports:
      - "5432:5432"
    volumes:
      - postgres-data:/var/lib/postgresql/data
[% endif %]
[% if "mongo" in services %]

  mongo:
    image: mongo:7
    ports:
      - "27017:27017"
    volumes:
      - mongo-data:/data/db
[% endif %]
[% if "redis" in services %]

  redis:
    image: redis:7-alpine
    ports:
      - "6379:6379"
[% endif %]
[% if volumes %]

volumes:
[% for volume in volumes %]
  [[ volume ]]:
[% endfor %]
[% endif %]
""",
    "tooling/ci.yml": """\
name: CI

on:
  push:
    branches: [main]
  pull_request:
    branches: [main]

jobs:
  build:
    runs-on: ubuntu-latest

    steps:
      - uses: actions/checkout@v4

      - uses: actions/setup-node@v4
        with:
          node-version: 20
          cache: npm

      - name: Install dependencies
        run: npm ci

      - name: Lint
        run: npm run lint --if-present

      - name: Build
        run: npm run build
[% if docker %]

  docker:
    runs-on: ubuntu-latest
    needs: build
    steps:
      - uses: actions/checkout@v4
      - name: Build image
        run: docker build -t [[ project_name ]]:${{ github.sha }} .
[% endif %]
""",
    "tooling/render.yaml": """\
services:
  - type: web
    name: [[ project_name ]]
    runtime: node
    plan: starter
    buildCommand: npm ci && [[ runtime.build ]]
    startCommand: [[ runtime.start ]]
    healthCheckPath: [[ runtime.health_path ]]
    envVars:
      - key: NODE_ENV
        value: production
      - key: PORT
        value: "[[ runtime.port ]]"
""",
    "tooling/ec2-setup.sh": """\
#!/usr/bin/env bash
# One-time provisioning for [[ display_name ]] on Ubuntu (EC2)
set -euo pipefail

sudo apt-get update
sudo apt-get install -y curl git nginx

curl -fsSL https://deb.nodesource.com/setup_20.x | sudo -E bash -
sudo apt-get install -y nodejs

sudo mkdir -p /opt/[[ project_name ]]
sudo chown "$USER":"$USER" /opt/[[ project_name ]]

sudo cp deploy/nginx.conf /etc/nginx/sites-available/[[ project_name ]]
sudo ln -sf /etc/nginx/sites-available/[[ project_name ]] /etc/nginx/sites-enabled/[[ project_name ]]
sudo rm -f /etc/nginx/sites-enabled/default
sudo nginx -t && sudo systemctl reload nginx

sudo cp deploy/[[ project_name ]].service /etc/systemd/system/
sudo systemctl daemon-reload
sudo systemctl enable [[ project_name ]]

echo "Setup complete. Run deploy/deploy.sh to ship the application."
""",
    "tooling/ec2-deploy.sh": """\
#!/usr/bin/env bash
# Build and restart [[ display_name ]]
set -euo pipefail

APP_DIR=/opt/[[ project_name ]]

rsync -a --delete --exclude node_modules --exclude .git ./ "$APP_DIR"/
cd "$APP_DIR"

npm ci
[[ runtime.build ]]

sudo systemctl restart [[ project_name ]]
echo "Deployed [[ project_name ]]"
""",
    "tooling/ec2.service": """\
[Unit]
Description=[[ display_name ]]
After=network.target

[Service]
Type=simple
User=ubuntu
WorkingDirectory=/opt/[[ project_name ]]
Environment=NODE_ENV=production
Environment=PORT=[[ runtime.port ]]
EnvironmentFile=-/opt/[[ project_name ]]/.env
ExecStart=/usr/bin/env [[ runtime.start ]]
Restart=on-failure
RestartSec=5

[Install]
WantedBy=multi-user.target
""",
    "tooling/nginx.conf": """\
server {
    listen 80;
    server_name _;

    location / {
        proxy_pass http://127.0.0.1:[[ runtime.port ]];
        proxy_http_version 1.1;
        proxy_set_header Upgrade $http_upgrade;
        proxy_set_header Connection 'upgrade';
        proxy_set_header Host $host;
        proxy_set_header X-Forwarded-For $proxy_add_x_forwarded_for;
        proxy_set_header X-Forwarded-Proto $scheme;
        proxy_cache_bypass $http_upgrade;
    }
}
""",
}

registry.register_many(TEMPLATES)


@dataclass(frozen=True)
class RuntimeProfile:
    """How the generated project is built and started in production."""

    port: int
    build: str
    start: str
    health_path: str


def runtime_profile(ctx: RenderContext) -> RuntimeProfile:
    if ctx.is_api_only:
        entry = "dist/main.js" if ctx.server_framework == "nestjs" else "dist/index.js"
        return RuntimeProfile(4000, "npm run build", f"node {entry}", "/health")
    if ctx.is_spa:
        return RuntimeProfile(
            4173, "npm run build", "npm run preview -- --host 0.0.0.0 --port 4173", "/"
        )
    if ctx.is_monorepo:
        return RuntimeProfile(
            3000, "npm run build", "npm run start --workspace=@repo/web", "/"
        )
    return RuntimeProfile(3000, "npm run build", "npm run start", "/")


def tsconfig(kind: str, ctx: RenderContext) -> str:
    """tsconfig.json text for ``next``, ``server``, ``spa`` or ``base``."""
    if kind == "next":
        return registry.render("tooling/tsconfig.next.json")
    if kind == "server":
        return registry.render(
            "tooling/tsconfig.server.json",
            decorators=ctx.server_framework == "nestjs",
        )
    if kind == "spa":
        frontend = ctx.config.frontend_framework
        return registry.render(
            "tooling/tsconfig.spa.json",
            jsx=frontend in ("react", "nextjs"),
            decorators=frontend == "angular",
        )
    return registry.render("tooling/tsconfig.base.json")


def _root_tsconfig_kind(ctx: RenderContext) -> str:
    if ctx.is_monorepo:
        return "base"
    if ctx.is_api_only:
        return "server"
    if ctx.is_spa:
        return "spa"
    return "next"


def contribution(ctx: RenderContext) -> Contribution:
    """Root-level dev tooling packages and scripts."""
    extras = ctx.config.extras
    dev: dict[str, str] = {}
    scripts: dict[str, str] = {}
    if not ctx.is_nextjs or ctx.is_monorepo:
        dev.update(
            {
                "eslint": "^9.15.0",
                "@eslint/js": "^9.15.0",
                "typescript-eslint": "^8.16.0",
                "typescript": "^5.7.2",
            }
        )
    else:
        dev["@eslint/eslintrc"] = "^3.2.0"
    if extras.prettier:
        dev["prettier"] = "^3.4.1"
        scripts["format"] = "prettier --write ."
        scripts["format:check"] = "prettier --check ."
    if extras.husky:
        dev.update(
            {
                "husky": "^9.1.7",
                "lint-staged": "^15.2.10",
                "@commitlint/cli": "^19.6.0",
                "@commitlint/config-conventional": "^19.6.0",
            }
        )
        scripts["prepare"] = "husky"
    return Contribution(dev_dependencies=dev, scripts=scripts)


def render_tooling(ctx: RenderContext) -> list[GeneratedFile]:
    """TypeScript, lint, format, git hooks, deployment, Docker and CI files."""
    extras = ctx.config.extras
    kind = _root_tsconfig_kind(ctx)
    files = [
        ctx.file(
            "tsconfig.json",
            ctx.cached(
                "tsconfig",
                {"kind": kind, **ctx.config.fields_subset("frontend_framework", "backend_framework")},
                lambda: tsconfig(kind, ctx),
            ),
            "config",
        ),
        ctx.file(
            "eslint.config.mjs",
            registry.render(
                "tooling/eslint.next.mjs" if kind == "next" else "tooling/eslint.ts.mjs"
            ),
            "config",
        ),
    ]

    if extras.prettier:
        files.append(
            ctx.file(
                ".prettierrc",
                ctx.cached(
                    "prettier-config",
                    {},
                    lambda: json.dumps(PRETTIER_CONFIG, indent=2) + "\n",
                ),
                "config",
            )
        )
        files.append(
            ctx.file(
                ".prettierignore",
                ctx.cached(
                    "prettier-ignore", {}, lambda: registry.render("tooling/prettierignore")
                ),
                "config",
            )
        )

    if extras.husky:
        lint_staged = {"*.{ts,tsx,js,jsx}": ["eslint --fix"]}
        if extras.prettier:
            lint_staged["*.{ts,tsx,js,jsx,json,css,md}"] = ["prettier --write"]
        files += [
            ctx.file(".husky/pre-commit", registry.render("tooling/husky-pre-commit"), "script"),
            ctx.file(".husky/commit-msg", registry.render("tooling/husky-commit-msg"), "script"),
            ctx.file(
                "commitlint.config.js",
                registry.render("tooling/commitlint.config.js"),
                "config",
            ),
            ctx.file(".lintstagedrc.json", json.dumps(lint_staged, indent=2) + "\n", "config"),
        ]

    files += render_deployment(ctx)

    if extras.docker:
        files += render_docker(ctx)

    if extras.github_actions:
        files.append(
            ctx.file(
                ".github/workflows/ci.yml",
                registry.render("tooling/ci.yml", **ctx.params(docker=extras.docker)),
                "config",
            )
        )

    return files


def render_deployment(ctx: RenderContext) -> list[GeneratedFile]:
    """Per-target platform configuration."""
    runtime = runtime_profile(ctx)
    params = ctx.params(runtime=runtime)
    files: list[GeneratedFile] = []
    targets = ctx.config.deployment

    if "vercel" in targets:
        files.append(ctx.file("vercel.json", _vercel_json(ctx), "config"))

    if "railway" in targets:
        railway = {
            "$schema": "https://railway.app/railway.schema.json",
            "build": {"builder": "DOCKERFILE" if ctx.config.extras.docker else "NIXPACKS"},
            "deploy": {
                "startCommand": runtime.start,
                "healthcheckPath": runtime.health_path,
                "restartPolicyType": "ON_FAILURE",
                "restartPolicyMaxRetries": 10,
            },
        }
        files.append(ctx.file("railway.json", json.dumps(railway, indent=2) + "\n", "config"))

    if "render" in targets:
        files.append(ctx.file("render.yaml", registry.render("tooling/render.yaml", **params), "config"))

    if "ec2" in targets:
        name = ctx.project_name
        files += [
            ctx.file("deploy/setup.sh", registry.render("tooling/ec2-setup.sh", **params), "script"),
            ctx.file("deploy/deploy.sh", registry.render("tooling/ec2-deploy.sh", **params), "script"),
            ctx.file(f"deploy/{name}.service", registry.render("tooling/ec2.service", **params), "config"),
            ctx.file("deploy/nginx.conf", registry.render("tooling/nginx.conf", **params), "config"),
        ]

    return files


def _vercel_json(ctx: RenderContext) -> str:
    if ctx.is_monorepo:
        config = {
            "buildCommand": "npx turbo run build --filter=@repo/web",
            "outputDirectory": "apps/web/.next",
            "framework": "nextjs",
        }
    elif ctx.is_spa:
        config = {
            "framework": "vite" if ctx.config.build_tool != "webpack" else None,
            "buildCommand": "npm run build",
            "outputDirectory": "dist",
            "rewrites": [{"source": "/(.*)", "destination": "/index.html"}],
        }
    else:
        config = {"framework": "nextjs", "buildCommand": "npm run build"}
    return json.dumps(config, indent=2) + "\n"


def compose_services(ctx: RenderContext) -> list[str]:
    """Backing services started next to the app by docker compose."""
    services = []
    if ctx.config.database in ("prisma-postgres", "drizzle-postgres"):
        services.append("postgres")
    if ctx.config.database == "mongodb":
        services.append("mongo")
    if ctx.config.extras.redis:
        services.append("redis")
    return services


def render_docker(ctx: RenderContext) -> list[GeneratedFile]:
    runtime = runtime_profile(ctx)
    if ctx.is_monorepo:
        kind = "monorepo"
    elif ctx.is_spa:
        kind = "spa"
    elif ctx.is_api_only:
        kind = "server"
    else:
        kind = "next"
    services = compose_services(ctx)
    volumes = [f"{service}-data" for service in services if service in ("postgres", "mongo")]
    container_port = 80 if ctx.is_spa else runtime.port
    entry = runtime.start.removeprefix("node ")
    return [
        ctx.file(
            "Dockerfile",
            registry.render("tooling/Dockerfile", kind=kind, port=runtime.port, entry=entry),
            "config",
        ),
        ctx.file(
            "docker-compose.yml",
            registry.render(
                "tooling/docker-compose.yml",
                **ctx.params(
                    services=services,
                    volumes=volumes,
                    host_port=runtime.port,
                    container_port=container_port,
                ),
            ),
            "config",
        ),
        ctx.file(".dockerignore", registry.render("tooling/dockerignore"), "config"),
    ]
