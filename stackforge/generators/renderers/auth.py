"""Authentication integration files."""

from stackforge.generators.context import RenderContext
from stackforge.generators.renderers.contributions import Contribution, Provider
from stackforge.generators.renderers.supabase import (
    SUPABASE_DEPENDENCIES,
    render_supabase_core,
)
from stackforge.generators.templating import registry
from stackforge.models.generation import GeneratedFile

TEMPLATES = {
    "auth/nextauth/auth.ts": """\
import type { NextAuthOptions } from 'next-auth';
import CredentialsProvider from 'next-auth/providers/credentials';
import GitHubProvider from 'next-auth/providers/github';

export const authOptions: NextAuthOptions = {
  session: { strategy: 'jwt' },
  pages: {
    signIn: '/auth/signin',
    error: '/auth/error',
  },
  providers: [
    GitHubProvider({
      clientId: process.env.GITHUB_ID ?? '',
      clientSecret: process.env.GITHUB_SECRET ?? '',
    }),
    CredentialsProvider({
      name: 'Email',
      credentials: {
        email: { label: 'Email', type: 'email' },
        password: { label: 'Password', type: 'password' },
      },
      async authorize(credentials) {
        if (!credentials?.email || !credentials.password) {
          return null;
        }
        // Replace with a lookup against your user table.
        return { id: credentials.email, email: credentials.email };
      },
    }),
  ],
  callbacks: {
    async session({ session, token }) {
      if (session.user && token.sub) {
        (session.user as { id?: string }).id = token.sub;
      }
      return session;
    },
  },
};
""",
    "auth/nextauth/route.ts": """\
import NextAuth from 'next-auth';

import { authOptions } from '@/lib/auth';

const handler = NextAuth(authOptions);

export { handler as GET, handler as POST };
""",
    "auth/nextauth/middleware.ts": """\
export { default } from 'next-auth/middleware';

export const config = {
  matcher: ['/dashboard/:path*'],
};
""",
    "auth/nextauth/auth-provider.tsx": """\
'use client';

import { SessionProvider } from 'next-auth/react';
import type { ReactNode } from 'react';

export function AuthProvider({ children }: { children: ReactNode }) {
  return <SessionProvider>{children}</SessionProvider>;
}
""",
    "auth/nextauth/signin.tsx": """\
'use client';

import { signIn } from 'next-auth/react';
import { useState, type FormEvent } from 'react';

export default function SignInPage() {
  const [email, setEmail] = useState('');
  const [password, setPassword] = useState('');

  async function handleSubmit(event: FormEvent) {
    event.preventDefault();
    await signIn('credentials', { email, password, callbackUrl: '/dashboard' });
  }

  return (
    <main className="flex min-h-screen items-center justify-center">
      <form onSubmit={handleSubmit} className="w-full max-w-sm space-y-4">
        <h1 className="text-2xl font-bold">Sign in to [[ display_name ]]</h1>
        <input
          className="w-full rounded border p-2"
          type="email"
          placeholder="Email"
          value={email}
          onChange={(e) => setEmail(e.target.value)}
        />
        <input
          className="w-full rounded border p-2"
          type="password"
          placeholder="Password"
          value={password}
          onChange={(e) => setPassword(e.target.value)}
        />
        <button className="w-full rounded bg-[[ colors.primary ]] p-2 text-white" type="submit">
          Sign in
        </button>
        <button
          className="w-full rounded border p-2"
          type="button"
          onClick={() => signIn('github', { callbackUrl: '/dashboard' })}
        >
          Continue with GitHub
        </button>
      </form>
    </main>
  );
}
""",
    "auth/nextauth/error.tsx": """\
'use client';

import Link from 'next/link';
import { useSearchParams } from 'next/navigation';
import { Suspense } from 'react';

function ErrorMessage() {
  const params = useSearchParams();
  const error = params.get('error') ?? 'Unknown error';
  return <p className="text-red-600">Authentication failed: {error}</p>;
}

export default function AuthErrorPage() {
  return (
    <main className="flex min-h-screen flex-col items-center justify-center gap-4">
      <h1 className="text-2xl font-bold">Something went wrong</h1>
      <Suspense>
        <ErrorMessage />
      </Suspense>
      <Link className="text-[[ colors.primary ]] underline" href="/auth/signin">
        Try again
      </Link>
    </main>
  );
}
""",
    "auth/supabase/auth-helpers.ts": """\
import { redirect } from 'next/navigation';

import { createClient } from '@/lib/supabase-server';

export async function getCurrentUser() {
  const supabase = await createClient();
  const {
    data: { user },
  } = await supabase.auth.getUser();
  return user;
}

export async function requireUser() {
  const user = await getCurrentUser();
  if (!user) {
    redirect('/signin');
  }
  return user;
}

export async function signOut() {
  const supabase = await createClient();
  await supabase.auth.signOut();
  redirect('/');
}
""",
    "auth/supabase/callback.ts": """\
import { NextResponse } from 'next/server';

import { createClient } from '@/lib/supabase-server';

export async function GET(request: Request) {
  const { searchParams, origin } = new URL(request.url);
  const code = searchParams.get('code');
  const next = searchParams.get('next') ?? '/dashboard';

  if (code) {
    const supabase = await createClient();
    const { error } = await supabase.auth.exchangeCodeForSession(code);
    if (!error) {
      return NextResponse.redirect(`${origin}${next}`);
    }
  }

  return NextResponse.redirect(`${origin}/signin?error=callback`);
}
""",
    "auth/clerk/middleware.ts": """\
import { clerkMiddleware, createRouteMatcher } from '@clerk/nextjs/server';

const isProtectedRoute = createRouteMatcher(['/dashboard(.*)']);

export default clerkMiddleware(async (auth, request) => {
  if (isProtectedRoute(request)) {
    await auth.protect();
  }
});

export const config = {
  matcher: ['/((?!_next|.*\\\\..*).*)', '/(api|trpc)(.*)'],
};
""",
    "auth/clerk/user-button.tsx": """\
'use client';

import { SignedIn, SignedOut, SignInButton, UserButton } from '@clerk/nextjs';

export function ClerkUserButton() {
  return (
    <>
      <SignedOut>
        <SignInButton />
      </SignedOut>
      <SignedIn>
        <UserButton />
      </SignedIn>
    </>
  );
}
""",
    "auth/clerk/sign-in.tsx": """\
import { SignIn } from '@clerk/nextjs';

export default function Page() {
  return (
    <main className="flex min-h-screen items-center justify-center">
      <SignIn />
    </main>
  );
}
""",
    "auth/clerk/sign-up.tsx": """\
import { SignUp } from '@clerk/nextjs';

export default function Page() {
  return (
    <main className="flex min-h-screen items-center justify-center">
      <SignUp />
    </main>
  );
}
""",
}

registry.register_many(TEMPLATES)


def applies(ctx: RenderContext) -> bool:
    """Auth files need a provider and somewhere to render sign-in UI."""
    return ctx.config.auth != "none" and not ctx.is_api_only


def emits_supabase_client(ctx: RenderContext) -> bool:
    """Whether this renderer owns the shared Supabase client files."""
    return applies(ctx) and ctx.config.auth == "supabase"


def auth_routes(ctx: RenderContext) -> list[str]:
    """URL paths of the pages and handlers this renderer emits."""
    if not applies(ctx):
        return []
    return {
        "nextauth": ["/auth/signin", "/auth/error", "/api/auth/[...nextauth]"],
        "supabase": ["/auth/callback"],
        "clerk": ["/sign-in", "/sign-up"],
    }[ctx.config.auth]


def contribution(ctx: RenderContext) -> Contribution:
    if not applies(ctx):
        return Contribution()
    auth = ctx.config.auth
    if auth == "nextauth":
        return Contribution(
            dependencies={"next-auth": "^4.24.10"},
            providers=[
                Provider(
                    import_line="import { AuthProvider } from '@/components/auth-provider';",
                    open_tag="<AuthProvider>",
                    close_tag="</AuthProvider>",
                    order=20,
                )
            ],
        )
    if auth == "clerk":
        return Contribution(
            dependencies={"@clerk/nextjs": "^6.5.0"},
            providers=[
                Provider(
                    import_line="import { ClerkProvider } from '@clerk/nextjs';",
                    open_tag="<ClerkProvider>",
                    close_tag="</ClerkProvider>",
                    order=0,
                )
            ],
        )
    return Contribution(dependencies=dict(SUPABASE_DEPENDENCIES))


def render_auth(ctx: RenderContext) -> list[GeneratedFile]:
    """Auth configuration, route handlers, middleware and auth pages."""
    if not applies(ctx):
        return []
    params = ctx.params()
    auth = ctx.config.auth

    if auth == "nextauth":
        return [
            ctx.file(ctx.src("lib/auth.ts"), registry.render("auth/nextauth/auth.ts")),
            ctx.file(
                ctx.src("app/api/auth/[...nextauth]/route.ts"),
                registry.render("auth/nextauth/route.ts"),
            ),
            ctx.file(ctx.web("middleware.ts"), registry.render("auth/nextauth/middleware.ts")),
            ctx.file(
                ctx.src("components/auth-provider.tsx"),
                registry.render("auth/nextauth/auth-provider.tsx"),
            ),
            ctx.file(
                ctx.src("app/auth/signin/page.tsx"),
                registry.render("auth/nextauth/signin.tsx", **params),
            ),
            ctx.file(
                ctx.src("app/auth/error/page.tsx"),
                registry.render("auth/nextauth/error.tsx", **params),
            ),
        ]

    if auth == "supabase":
        return [
            *render_supabase_core(ctx),
            ctx.file(
                ctx.src("lib/auth-helpers.ts"),
                registry.render("auth/supabase/auth-helpers.ts"),
            ),
            ctx.file(
                ctx.src("app/auth/callback/route.ts"),
                registry.render("auth/supabase/callback.ts"),
            ),
        ]

    if auth == "clerk":
        return [
            ctx.file(ctx.web("middleware.ts"), registry.render("auth/clerk/middleware.ts")),
            ctx.file(
                ctx.src("components/clerk-user-button.tsx"),
                registry.render("auth/clerk/user-button.tsx"),
            ),
            ctx.file(
                ctx.src("app/sign-in/[[...sign-in]]/page.tsx"),
                registry.render("auth/clerk/sign-in.tsx"),
            ),
            ctx.file(
                ctx.src("app/sign-up/[[...sign-up]]/page.tsx"),
                registry.render("auth/clerk/sign-up.tsx"),
            ),
        ]

    raise ValueError(f"Unsupported auth provider: {auth}")
