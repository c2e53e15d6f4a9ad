"""Next.js application scaffolding (standalone or as the monorepo web app)."""

from stackforge.generators.context import RenderContext
from stackforge.generators.renderers import tooling
from stackforge.generators.renderers.contributions import Contribution, merge_all
from stackforge.generators.renderers.manifest import feature_contribution, package_json
from stackforge.generators.renderers.styling import render_styling
from stackforge.generators.templating import registry
from stackforge.models.generation import GeneratedFile

TEMPLATES = {
    "nextjs/next.config.ts": """\
import type { NextConfig } from 'next';

const nextConfig: NextConfig = {
  reactStrictMode: true,
[% for key, value in options %]
  [[ key ]]: [[ value ]],
[% endfor %]
};

export default nextConfig;
""",
    "nextjs/layout.tsx": """\
import type { Metadata } from 'next';
import type { ReactNode } from 'react';

[% for provider in providers %]
[[ provider.import_line ]]
[% endfor %]
import './globals.css';

export const metadata: Metadata = {
  title: [[ display_name | tojson ]],
  description: [[ description | tojson ]],
};

export default function RootLayout({ children }: { children: ReactNode }) {
  return (
    <html lang="en">
      <body>
[% for provider in providers %]
        [[ "  " * loop.index0 ]][[ provider.open_tag ]]
[% endfor %]
        [[ "  " * providers | length ]]{children}
[% for provider in providers | reverse %]
        [[ "  " * (providers | length - loop.index) ]][[ provider.close_tag ]]
[% endfor %]
      </body>
    </html>
  );
}
""",
    "nextjs/page.tsx": """\
import Link from 'next/link';
[% if styling == "css-modules" %]

import styles from './page.module.css';

export default function HomePage() {
  return (
    <main className={styles.main}>
      <h1 className={styles.title}>[[ display_name ]]</h1>
      <p className={styles.description}>{[[ description | tojson ]]}</p>
      <Link href="/dashboard">Open the dashboard</Link>
    </main>
  );
}
[% elif styling == "styled-components" %]

export default function HomePage() {
  return (
    <main style={{ display: 'grid', placeItems: 'center', minHeight: '100vh', gap: '1rem' }}>
      <h1 style={{ color: '[[ colors.hex ]]' }}>[[ display_name ]]</h1>
      <p>{[[ description | tojson ]]}</p>
      <Link href="/dashboard">Open the dashboard</Link>
    </main>
  );
}
[% else %]

export default function HomePage() {
  return (
    <main className="flex min-h-screen flex-col items-center justify-center gap-6 p-8">
      <h1 className="text-5xl font-bold text-[[ colors.primary ]]">[[ display_name ]]</h1>
      <p className="max-w-xl text-center text-lg text-gray-600">{[[ description | tojson ]]}</p>
      <Link
        href="/dashboard"
        className="rounded-lg bg-[[ colors.primary ]] px-6 py-3 font-medium text-white hover:bg-[[ colors.primary_hover ]]"
      >
        Open the dashboard
      </Link>
    </main>
  );
}
[% endif %]
""",
    "nextjs/hello-route.ts": """\
import { NextResponse } from 'next/server';

export async function GET() {
  return NextResponse.json({ message: 'Hello from [[ display_name ]]' });
}
""",
    "nextjs/pages-app.tsx": """\
import type { AppProps } from 'next/app';

import '../app/globals.css';

export default function App({ Component, pageProps }: AppProps) {
  return <Component {...pageProps} />;
}
""",
    "nextjs/pages-about.tsx": """\
import type { GetStaticProps } from 'next';

type Props = { builtAt: string };

export const getStaticProps: GetStaticProps<Props> = async () => ({
  props: { builtAt: new Date().toISOString() },
});

export default function AboutPage({ builtAt }: Props) {
  return (
    <main style={{ padding: '2rem' }}>
      <h1>About [[ display_name ]]</h1>
      <p>{[[ description | tojson ]]}</p>
      <p>Built at {builtAt}</p>
    </main>
  );
}
""",
}

registry.register_many(TEMPLATES)

NEXT_DEPENDENCIES = {
    "next": "^15.0.3",
    "react": "^19.0.0",
    "react-dom": "^19.0.0",
}

NEXT_DEV_DEPENDENCIES = {
    "@types/node": "^22.10.0",
    "@types/react": "^19.0.0",
    "@types/react-dom": "^19.0.0",
    "eslint": "^9.15.0",
    "eslint-config-next": "^15.0.3",
    "typescript": "^5.7.2",
}

NEXT_SCRIPTS = {
    "dev": "next dev",
    "build": "next build",
    "start": "next start",
    "lint": "next lint",
}


def render_nextjs_app(ctx: RenderContext, extra: Contribution | None = None) -> list[GeneratedFile]:
    """Files for a Next.js application rooted at the context's web root.

    ``extra`` carries manifest additions that only apply at this root, such
    as tooling for a standalone app or workspace links for a monorepo app.
    """
    features = feature_contribution(ctx)
    manifest = merge_all([features, extra or Contribution()])
    params = ctx.params(styling=ctx.config.styling)

    next_options = dict(features.next_config)
    if ctx.is_monorepo:
        next_options["transpilePackages"] = "['@repo/shared-types']"

    name = "@repo/web" if ctx.is_monorepo else ctx.project_name
    files = [
        ctx.file(
            ctx.web("package.json"),
            package_json(
                name,
                NEXT_SCRIPTS,
                manifest,
                dependencies=NEXT_DEPENDENCIES,
                dev_dependencies=NEXT_DEV_DEPENDENCIES,
            ),
            "config",
        ),
        ctx.file(
            ctx.web("next.config.ts"),
            registry.render("nextjs/next.config.ts", options=sorted(next_options.items())),
            "config",
        ),
        ctx.file(
            ctx.src("app/layout.tsx"),
            registry.render("nextjs/layout.tsx", **params, providers=features.providers),
        ),
        ctx.file(ctx.src("app/page.tsx"), registry.render("nextjs/page.tsx", **params)),
        *render_styling(ctx),
    ]

    if ctx.config.nextjs_router == "pages":
        files.append(ctx.file(ctx.src("pages/_app.tsx"), registry.render("nextjs/pages-app.tsx")))
        files.append(
            ctx.file(ctx.src("pages/about.tsx"), registry.render("nextjs/pages-about.tsx", **params))
        )

    return files


def render_nextjs_only(ctx: RenderContext) -> list[GeneratedFile]:
    """Standalone Next.js project with an example API route."""
    files = render_nextjs_app(ctx, tooling.contribution(ctx))
    files.append(
        ctx.file(
            ctx.src("app/api/hello/route.ts"),
            registry.render("nextjs/hello-route.ts", **ctx.params()),
        )
    )
    return files
