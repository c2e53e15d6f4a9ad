"""Lookup tables shared by renderers and documentation.

Anything that more than one component needs to agree on (provider metadata,
AI template routes, human-readable option names) lives here so the generated
files and the prose describing them cannot drift apart.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AIProviderInfo:
    """Metadata for one AI provider."""

    display_name: str
    console_url: str
    pricing_url: str
    env_var: str
    key_prefix: str | None
    package: str
    package_version: str
    default_model: str
    extra_env: tuple[tuple[str, str], ...] = ()


AI_PROVIDERS: dict[str, AIProviderInfo] = {
    "anthropic": AIProviderInfo(
        display_name="Anthropic Claude",
        console_url="https://console.anthropic.com/",
        pricing_url="https://www.anthropic.com/pricing",
        env_var="ANTHROPIC_API_KEY",
        key_prefix="sk-ant-",
        package="@anthropic-ai/sdk",
        package_version="^0.32.1",
        default_model="claude-3-5-sonnet-latest",
    ),
    "openai": AIProviderInfo(
        display_name="OpenAI",
        console_url="https://platform.openai.com/",
        pricing_url="https://openai.com/pricing",
        env_var="OPENAI_API_KEY",
        key_prefix="sk-",
        package="openai",
        package_version="^4.73.0",
        default_model="gpt-4o-mini",
    ),
    "aws-bedrock": AIProviderInfo(
        display_name="AWS Bedrock",
        console_url="https://aws.amazon.com/bedrock/",
        pricing_url="https://aws.amazon.com/bedrock/pricing/",
        env_var="AWS_BEDROCK_CREDENTIALS",
        key_prefix=None,
        package="@aws-sdk/client-bedrock-runtime",
        package_version="^3.700.0",
        default_model="anthropic.claude-3-5-sonnet-20240620-v1:0",
        extra_env=(("AWS_REGION", "us-east-1"),),
    ),
    "gemini": AIProviderInfo(
        display_name="Google Gemini",
        console_url="https://ai.google.dev/",
        pricing_url="https://ai.google.dev/pricing",
        env_var="GEMINI_API_KEY",
        key_prefix=None,
        package="@google/generative-ai",
        package_version="^0.21.0",
        default_model="gemini-1.5-flash",
    ),
}


@dataclass(frozen=True)
class AITemplateInfo:
    """Routes, page and selling points of one AI template."""

    title: str
    description: str
    route: str
    page: str
    features: tuple[str, ...] = field(default_factory=tuple)


AI_TEMPLATES: dict[str, AITemplateInfo] = {
    "chatbot": AITemplateInfo(
        title="AI Chatbot",
        description="Conversational assistant with streaming responses",
        route="chat",
        page="chat",
        features=(
            "Streaming responses",
            "Conversation history",
            "Markdown rendering",
            "Copy code blocks",
        ),
    ),
    "document-analyzer": AITemplateInfo(
        title="Document Analyzer",
        description="Upload documents and extract summaries and key points",
        route="analyze",
        page="analyze",
        features=(
            "Text and markdown upload",
            "Summaries and key points",
            "Question answering over the document",
            "Structured JSON output",
        ),
    ),
    "semantic-search": AITemplateInfo(
        title="Semantic Search",
        description="Meaning-based search over your own content",
        route="search",
        page="search",
        features=(
            "Embedding-free relevance ranking",
            "Result snippets with scores",
            "Query rewriting",
            "Pluggable document source",
        ),
    ),
    "code-assistant": AITemplateInfo(
        title="Code Assistant",
        description="Explain, review and refactor code snippets",
        route="code-assistant",
        page="code-assistant",
        features=(
            "Explain, review and refactor modes",
            "Language selection",
            "Syntax-highlighted output",
            "Copy results",
        ),
    ),
    "image-generator": AITemplateInfo(
        title="Image Generator",
        description="Turn short ideas into detailed image prompts and images",
        route="generate-image",
        page="generate-image",
        features=(
            "Prompt enhancement",
            "Style presets",
            "Image gallery",
            "Download results",
        ),
    ),
}


@dataclass(frozen=True)
class ColorClasses:
    """Tailwind class fragments for one color scheme."""

    primary: str
    primary_hover: str
    surface: str
    accent: str
    hex: str


COLOR_SCHEMES: dict[str, ColorClasses] = {
    "purple": ColorClasses("purple-600", "purple-700", "purple-50", "purple-500", "#9333ea"),
    "gold": ColorClasses("amber-600", "amber-700", "amber-50", "amber-500", "#d97706"),
    "white": ColorClasses("gray-900", "gray-800", "gray-50", "gray-700", "#111827"),
    "futuristic": ColorClasses("cyan-600", "cyan-700", "cyan-50", "cyan-500", "#0891b2"),
}

DEFAULT_COLORS = ColorClasses("blue-600", "blue-700", "blue-50", "blue-500", "#2563eb")


FRONTEND_NAMES: dict[str, str] = {
    "nextjs": "Next.js 15",
    "react": "React 18",
    "vue": "Vue 3",
    "angular": "Angular 18",
    "svelte": "Svelte 4",
}

BACKEND_NAMES: dict[str, str] = {
    "none": "None",
    "nextjs-api": "Next.js API Routes",
    "express": "Express.js",
    "fastify": "Fastify",
    "nestjs": "NestJS",
}

STRUCTURE_NAMES: dict[str, str] = {
    "nextjs-only": "Next.js full-stack application",
    "react-spa": "Single-page application",
    "fullstack-monorepo": "Full-stack monorepo (Turborepo)",
    "express-api-only": "Standalone API server",
}

AUTH_NAMES: dict[str, str] = {
    "nextauth": "NextAuth.js",
    "supabase": "Supabase Auth",
    "clerk": "Clerk",
}

AUTH_DESCRIPTIONS: dict[str, str] = {
    "nextauth": "Flexible authentication for Next.js with OAuth providers and database sessions",
    "supabase": "Supabase Auth with email/password, magic links and row-level security",
    "clerk": "Hosted user management with prebuilt sign-in and profile components",
}

DATABASE_NAMES: dict[str, str] = {
    "prisma-postgres": "PostgreSQL + Prisma",
    "drizzle-postgres": "PostgreSQL + Drizzle",
    "supabase": "Supabase (PostgreSQL)",
    "mongodb": "MongoDB",
}

DATABASE_DESCRIPTIONS: dict[str, str] = {
    "prisma-postgres": "Type-safe PostgreSQL access with the Prisma ORM and migrations",
    "drizzle-postgres": "Lightweight SQL-first PostgreSQL access with Drizzle ORM",
    "supabase": "Managed PostgreSQL with a generated client and row-level security",
    "mongodb": "Document database accessed through the official MongoDB driver",
}

API_NAMES: dict[str, str] = {
    "rest-fetch": "REST (fetch)",
    "rest-axios": "REST (Axios)",
    "trpc": "tRPC",
    "graphql": "GraphQL (Apollo)",
}

STYLING_NAMES: dict[str, str] = {
    "tailwind": "Tailwind CSS",
    "css-modules": "CSS Modules",
    "styled-components": "styled-components",
}

DEPLOYMENT_NAMES: dict[str, str] = {
    "vercel": "Vercel",
    "render": "Render",
    "ec2": "AWS EC2",
    "railway": "Railway",
}


def colors_for(scheme: str) -> ColorClasses:
    """Color classes for a scheme, falling back to blue."""
    return COLOR_SCHEMES.get(scheme, DEFAULT_COLORS)
