"""Project-level documents: .gitignore, README, .env.example and guides."""

from stackforge.generators.context import RenderContext
from stackforge.generators.documentation import DocumentationGenerator
from stackforge.generators.templating import registry
from stackforge.models.generation import GeneratedFile

TEMPLATES = {
    "metadata/gitignore": """\
# dependencies
node_modules/
.pnp
.pnp.js

# testing
coverage/

# builds
[% if structure in ("nextjs-only", "fullstack-monorepo") %]
.next/
out/
[% endif %]
dist/
build/
[% if structure == "fullstack-monorepo" %]
.turbo/
[% endif %]

# misc
.DS_Store
*.pem

# debug
npm-debug.log*
yarn-debug.log*
yarn-error.log*

# env files
.env
.env*.local

# vercel
.vercel

# typescript
*.tsbuildinfo
[% if structure in ("nextjs-only", "fullstack-monorepo") %]
next-env.d.ts
[% endif %]
""",
}

registry.register_many(TEMPLATES)


def render_metadata(ctx: RenderContext) -> list[GeneratedFile]:
    """Ignore file and documentation for the whole project."""
    docs = DocumentationGenerator(ctx)
    structure = {"structure": ctx.structure}

    if ctx.is_remote_publish:
        # Remote READMEs carry the repository URL and are never shared.
        readme = docs.readme()
    else:
        readme = ctx.cached("readme", ctx.config.model_dump(mode="json"), docs.readme)

    files = [
        ctx.file(
            ".gitignore",
            ctx.cached(
                "gitignore",
                structure,
                lambda: registry.render("metadata/gitignore", **structure),
            ),
            "config",
        ),
        ctx.file("README.md", readme, "docs"),
        ctx.file(".env.example", docs.env_example(), "config"),
    ]

    setup = docs.setup()
    if setup is not None:
        files.append(ctx.file("SETUP.md", setup, "docs"))

    files.append(ctx.file("DEPLOYMENT.md", docs.deployment(), "docs"))

    guide = docs.monorepo_guide()
    if guide is not None:
        files.append(ctx.file("MONOREPO.md", guide, "docs"))

    return files
