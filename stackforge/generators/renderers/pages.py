"""Boilerplate application pages styled with the chosen color scheme."""

from stackforge.generators.context import RenderContext
from stackforge.generators.templating import registry
from stackforge.models.generation import GeneratedFile

TEMPLATES = {
    "pages/dashboard.tsx": """\
const stats = [
  { label: 'Active users', value: '1,204' },
  { label: 'Requests today', value: '18,430' },
  { label: 'Uptime', value: '99.98%' },
];

export default function DashboardPage() {
  return (
    <main className="min-h-screen bg-[[ colors.surface ]] p-8">
      <div className="mx-auto max-w-5xl space-y-8">
        <header>
          <h1 className="text-3xl font-bold text-[[ colors.primary ]]">Dashboard</h1>
          <p className="text-gray-600">Welcome back to [[ display_name ]].</p>
        </header>
        <section className="grid gap-4 sm:grid-cols-3">
          {stats.map((stat) => (
            <div key={stat.label} className="rounded-lg bg-white p-6 shadow-sm">
              <p className="text-sm text-gray-500">{stat.label}</p>
              <p className="mt-2 text-2xl font-semibold">{stat.value}</p>
            </div>
          ))}
        </section>
      </div>
    </main>
  );
}
""",
    "pages/auth-form.tsx": """\
'use client';

import Link from 'next/link';
import { useState, type FormEvent } from 'react';

export default function [[ component ]]() {
  const [email, setEmail] = useState('');
[% if with_password %]
  const [password, setPassword] = useState('');
[% endif %]
  const [submitted, setSubmitted] = useState(false);

  function handleSubmit(event: FormEvent) {
    event.preventDefault();
    setSubmitted(true);
  }

  return (
    <main className="flex min-h-screen items-center justify-center bg-[[ colors.surface ]]">
      <form onSubmit={handleSubmit} className="w-full max-w-sm space-y-4 rounded-lg bg-white p-8 shadow">
        <h1 className="text-2xl font-bold">[[ heading ]]</h1>
        <input
          className="w-full rounded border p-2"
          type="email"
          placeholder="Email"
          value={email}
          onChange={(e) => setEmail(e.target.value)}
          required
        />
[% if with_password %]
        <input
          className="w-full rounded border p-2"
          type="password"
          placeholder="Password"
          value={password}
          onChange={(e) => setPassword(e.target.value)}
          required
        />
[% endif %]
        <button
          className="w-full rounded bg-[[ colors.primary ]] p-2 font-medium text-white hover:bg-[[ colors.primary_hover ]]"
          type="submit"
        >
          [[ action ]]
        </button>
        {submitted ? <p className="text-sm text-gray-600">Check your inbox to continue.</p> : null}
        <p className="text-sm text-gray-600">
[% for href, label in links %]
          <Link className="text-[[ colors.accent ]] hover:underline" href="[[ href ]]">
            [[ label ]]
          </Link>
[% if not loop.last %]
          {' | '}
[% endif %]
[% endfor %]
        </p>
      </form>
    </main>
  );
}
""",
}

registry.register_many(TEMPLATES)

_AUTH_PAGES = (
    (
        "app/signin/page.tsx",
        {
            "component": "SignInPage",
            "heading": "Sign in",
            "action": "Sign in",
            "with_password": True,
            "links": [("/signup", "Create an account"), ("/forgot-password", "Forgot password?")],
        },
    ),
    (
        "app/signup/page.tsx",
        {
            "component": "SignUpPage",
            "heading": "Create your account",
            "action": "Sign up",
            "with_password": True,
            "links": [("/signin", "Already have an account?")],
        },
    ),
    (
        "app/forgot-password/page.tsx",
        {
            "component": "ForgotPasswordPage",
            "heading": "Reset your password",
            "action": "Send reset link",
            "with_password": False,
            "links": [("/signin", "Back to sign in")],
        },
    ),
)


def applies(ctx: RenderContext) -> bool:
    return ctx.has_frontend


def page_routes(ctx: RenderContext) -> list[str]:
    """URL paths of the pages this renderer emits."""
    if not applies(ctx):
        return []
    routes = ["/dashboard"]
    if ctx.config.auth != "none":
        routes += ["/signin", "/signup", "/forgot-password"]
    return routes


def render_pages(ctx: RenderContext) -> list[GeneratedFile]:
    """Dashboard always; sign-in, sign-up and password reset with auth."""
    if not applies(ctx):
        return []
    files = [
        ctx.file(
            ctx.src("app/dashboard/page.tsx"),
            registry.render("pages/dashboard.tsx", **ctx.params()),
        )
    ]
    if ctx.config.auth != "none":
        for relative, page in _AUTH_PAGES:
            files.append(
                ctx.file(ctx.src(relative), registry.render("pages/auth-form.tsx", **ctx.params(**page)))
            )
    return files
