"""Supabase client files shared by the auth and database renderers.

Whichever renderer owns them for a configuration emits them; see
``auth.emits_supabase_client``.
"""

from stackforge.generators.context import RenderContext
from stackforge.generators.templating import registry
from stackforge.models.generation import GeneratedFile

TEMPLATES = {
    "supabase/client.ts": """\
import { createBrowserClient } from '@supabase/ssr';

export function createClient() {
  return createBrowserClient(
    process.env.NEXT_PUBLIC_SUPABASE_URL!,
    process.env.NEXT_PUBLIC_SUPABASE_ANON_KEY!
  );
}
""",
    "supabase/server.ts": """\
import { createServerClient } from '@supabase/ssr';
import { cookies } from 'next/headers';

export async function createClient() {
  const cookieStore = await cookies();

  return createServerClient(
    process.env.NEXT_PUBLIC_SUPABASE_URL!,
    process.env.NEXT_PUBLIC_SUPABASE_ANON_KEY!,
    {
      cookies: {
        getAll() {
          return cookieStore.getAll();
        },
        setAll(cookiesToSet) {
          try {
            cookiesToSet.forEach(({ name, value, options }) =>
              cookieStore.set(name, value, options)
            );
          } catch {
            // Called from a Server Component; middleware refreshes sessions.
          }
        },
      },
    }
  );
}
""",
    "supabase/migration.sql": """\
-- [[ display_name ]]: initial schema

create table if not exists public.profiles (
  id uuid primary key references auth.users (id) on delete cascade,
  email text unique,
  full_name text,
  avatar_url text,
  created_at timestamptz not null default now(),
  updated_at timestamptz not null default now()
);

alter table public.profiles enable row level security;

create policy "Profiles are viewable by their owner"
  on public.profiles for select
  using (auth.uid() = id);

create policy "Profiles are updatable by their owner"
  on public.profiles for update
  using (auth.uid() = id);

create table if not exists public.items (
  id uuid primary key default gen_random_uuid(),
  owner_id uuid references auth.users (id) on delete cascade,
  title text not null,
  completed boolean not null default false,
  created_at timestamptz not null default now()
);

alter table public.items enable row level security;

create policy "Items are managed by their owner"
  on public.items for all
  using (auth.uid() = owner_id);

create or replace function public.handle_new_user()
returns trigger as $$
begin
  insert into public.profiles (id, email)
  values (new.id, new.email);
  return new;
end;
$$ language plpgsql security definer;

create or replace trigger on_auth_user_created
  after insert on auth.users
  for each row execute procedure public.handle_new_user();
""",
}

registry.register_many(TEMPLATES)

SUPABASE_DEPENDENCIES = {
    "@supabase/supabase-js": "^2.46.2",
    "@supabase/ssr": "^0.5.2",
}


def render_supabase_core(ctx: RenderContext) -> list[GeneratedFile]:
    """Browser client, server client and the initial migration."""
    return [
        ctx.file(ctx.src("lib/supabase-client.ts"), registry.render("supabase/client.ts")),
        ctx.file(ctx.src("lib/supabase-server.ts"), registry.render("supabase/server.ts")),
        ctx.file(
            ctx.web("supabase/migrations/001_initial_schema.sql"),
            registry.render("supabase/migration.sql", **ctx.params()),
            "script",
        ),
    ]
