"""Styling files for Next.js applications."""

from stackforge.generators.context import RenderContext
from stackforge.generators.renderers.contributions import Contribution, Provider
from stackforge.generators.templating import registry
from stackforge.models.generation import GeneratedFile

TEMPLATES = {
    "styling/globals.css": """\
[% if styling == "tailwind" %]
@tailwind base;
@tailwind components;
@tailwind utilities;

[% if shadcn %]
@layer base {
  :root {
    --background: 0 0% 100%;
    --foreground: 222.2 84% 4.9%;
    --card: 0 0% 100%;
    --card-foreground: 222.2 84% 4.9%;
    --primary: 222.2 47.4% 11.2%;
    --primary-foreground: 210 40% 98%;
    --muted: 210 40% 96.1%;
    --muted-foreground: 215.4 16.3% 46.9%;
    --border: 214.3 31.8% 91.4%;
    --input: 214.3 31.8% 91.4%;
    --ring: 222.2 84% 4.9%;
    --radius: 0.5rem;
  }

  body {
    @apply bg-background text-foreground;
  }
}
[% endif %]
[% else %]
:root {
  --brand: [[ colors.hex ]];
  --foreground: #111827;
  --background: #ffffff;
}

*,
*::before,
*::after {
  box-sizing: border-box;
}

body {
  margin: 0;
  font-family: system-ui, -apple-system, sans-serif;
  color: var(--foreground);
  background: var(--background);
}
[% endif %]
""",
    "styling/tailwind.config.ts": """\
import type { Config } from 'tailwindcss';

const config: Config = {
[% if shadcn %]
  darkMode: ['class'],
[% endif %]
  content: [
    './src/pages/**/*.{js,ts,jsx,tsx,mdx}',
    './src/components/**/*.{js,ts,jsx,tsx,mdx}',
    './src/app/**/*.{js,ts,jsx,tsx,mdx}',
  ],
  theme: {
    extend: {
      colors: {
        brand: '[[ colors.hex ]]',
[% if shadcn %]
        border: 'hsl(var(--border))',
        input: 'hsl(var(--input))',
        ring: 'hsl(var(--ring))',
        background: 'hsl(var(--background))',
        foreground: 'hsl(var(--foreground))',
        primary: {
          DEFAULT: 'hsl(var(--primary))',
          foreground: 'hsl(var(--primary-foreground))',
        },
        muted: {
          DEFAULT: 'hsl(var(--muted))',
          foreground: 'hsl(var(--muted-foreground))',
        },
        card: {
          DEFAULT: 'hsl(var(--card))',
          foreground: 'hsl(var(--card-foreground))',
        },
[% endif %]
      },
[% if shadcn %]
      borderRadius: {
        lg: 'var(--radius)',
        md: 'calc(var(--radius) - 2px)',
        sm: 'calc(var(--radius) - 4px)',
      },
[% endif %]
    },
  },
  plugins: [],
};

export default config;
""",
    "styling/postcss.config.mjs": """\
/** @type {import('postcss-load-config').Config} */
const config = {
  plugins: {
    tailwindcss: {},
    autoprefixer: {},
  },
};

export default config;
""",
    "styling/components.json": """\
{
  "$schema": "https://ui.shadcn.com/schema.json",
  "style": "default",
  "rsc": true,
  "tsx": true,
  "tailwind": {
    "config": "tailwind.config.ts",
    "css": "src/app/globals.css",
    "baseColor": "slate",
    "cssVariables": true
  },
  "aliases": {
    "components": "@/components",
    "utils": "@/lib/utils"
  }
}
""",
    "styling/shadcn/utils.ts": """\
import { clsx, type ClassValue } from 'clsx';
import { twMerge } from 'tailwind-merge';

export function cn(...inputs: ClassValue[]) {
  return twMerge(clsx(inputs));
}
""",
    "styling/shadcn/button.tsx": """\
import * as React from 'react';
import { Slot } from '@radix-ui/react-slot';
import { cva, type VariantProps } from 'class-variance-authority';

import { cn } from '@/lib/utils';

const buttonVariants = cva(
  'inline-flex items-center justify-center rounded-md text-sm font-medium transition-colors focus-visible:outline-none focus-visible:ring-2 disabled:pointer-events-none disabled:opacity-50',
  {
    variants: {
      variant: {
        default: 'bg-[[ colors.primary ]] text-white hover:bg-[[ colors.primary_hover ]]',
        outline: 'border border-input bg-background hover:bg-[[ colors.surface ]]',
        ghost: 'hover:bg-[[ colors.surface ]]',
      },
      size: {
        default: 'h-10 px-4 py-2',
        sm: 'h-9 rounded-md px-3',
        lg: 'h-11 rounded-md px-8',
      },
    },
    defaultVariants: {
      variant: 'default',
      size: 'default',
    },
  }
);

export interface ButtonProps
  extends React.ButtonHTMLAttributes<HTMLButtonElement>,
    VariantProps<typeof buttonVariants> {
  asChild?: boolean;
}

const Button = React.forwardRef<HTMLButtonElement, ButtonProps>(
  ({ className, variant, size, asChild = false, ...props }, ref) => {
    const Comp = asChild ? Slot : 'button';
    return (
      <Comp
        className={cn(buttonVariants({ variant, size, className }))}
        ref={ref}
        {...props}
      />
    );
  }
);
Button.displayName = 'Button';

export { Button, buttonVariants };
""",
    "styling/shadcn/card.tsx": """\
import * as React from 'react';

import { cn } from '@/lib/utils';

const Card = React.forwardRef<HTMLDivElement, React.HTMLAttributes<HTMLDivElement>>(
  ({ className, ...props }, ref) => (
    <div
      ref={ref}
      className={cn('rounded-lg border bg-card text-card-foreground shadow-sm', className)}
      {...props}
    />
  )
);
Card.displayName = 'Card';

const CardHeader = React.forwardRef<HTMLDivElement, React.HTMLAttributes<HTMLDivElement>>(
  ({ className, ...props }, ref) => (
    <div ref={ref} className={cn('flex flex-col space-y-1.5 p-6', className)} {...props} />
  )
);
CardHeader.displayName = 'CardHeader';

const CardTitle = React.forwardRef<HTMLHeadingElement, React.HTMLAttributes<HTMLHeadingElement>>(
  ({ className, ...props }, ref) => (
    <h3 ref={ref} className={cn('text-2xl font-semibold leading-none', className)} {...props} />
  )
);
CardTitle.displayName = 'CardTitle';

const CardContent = React.forwardRef<HTMLDivElement, React.HTMLAttributes<HTMLDivElement>>(
  ({ className, ...props }, ref) => (
    <div ref={ref} className={cn('p-6 pt-0', className)} {...props} />
  )
);
CardContent.displayName = 'CardContent';

export { Card, CardHeader, CardTitle, CardContent };
""",
    "styling/shadcn/input.tsx": """\
import * as React from 'react';

import { cn } from '@/lib/utils';

export type InputProps = React.InputHTMLAttributes<HTMLInputElement>;

const Input = React.forwardRef<HTMLInputElement, InputProps>(
  ({ className, type, ...props }, ref) => (
    <input
      type={type}
      className={cn(
        'flex h-10 w-full rounded-md border border-input bg-background px-3 py-2 text-sm focus-visible:outline-none focus-visible:ring-2 focus-visible:ring-[[ colors.accent ]]',
        className
      )}
      ref={ref}
      {...props}
    />
  )
);
Input.displayName = 'Input';

export { Input };
""",
    "styling/shadcn/showcase.tsx": """\
import { Button } from '@/components/ui/button';
import { Card, CardContent, CardHeader, CardTitle } from '@/components/ui/card';
import { Input } from '@/components/ui/input';

export default function ComponentsPage() {
  return (
    <main className="mx-auto max-w-3xl space-y-8 p-8">
      <h1 className="text-3xl font-bold">[[ display_name ]] components</h1>
      <Card>
        <CardHeader>
          <CardTitle>Buttons</CardTitle>
        </CardHeader>
        <CardContent className="flex gap-4">
          <Button>Primary</Button>
          <Button variant="outline">Outline</Button>
          <Button variant="ghost">Ghost</Button>
        </CardContent>
      </Card>
      <Card>
        <CardHeader>
          <CardTitle>Inputs</CardTitle>
        </CardHeader>
        <CardContent>
          <Input placeholder="you@example.com" type="email" />
        </CardContent>
      </Card>
    </main>
  );
}
""",
    "styling/modules/page.module.css": """\
.main {
  display: flex;
  min-height: 100vh;
  flex-direction: column;
  align-items: center;
  justify-content: center;
  padding: 4rem 1.5rem;
}

.title {
  font-size: 2.5rem;
  font-weight: 700;
  color: [[ colors.hex ]];
}

.description {
  margin-top: 1rem;
  max-width: 40rem;
  text-align: center;
  color: #4b5563;
}
""",
    "styling/modules/Button.tsx": """\
import type { ButtonHTMLAttributes } from 'react';

import styles from './Button.module.css';

type ButtonProps = ButtonHTMLAttributes<HTMLButtonElement> & {
  variant?: 'primary' | 'secondary';
};

export function Button({ variant = 'primary', className, ...props }: ButtonProps) {
  const classes = [styles.button, styles[variant], className].filter(Boolean).join(' ');
  return <button className={classes} {...props} />;
}
""",
    "styling/modules/Button.module.css": """\
.button {
  border: none;
  border-radius: 0.5rem;
  padding: 0.625rem 1.25rem;
  font-weight: 600;
  cursor: pointer;
  transition: opacity 0.15s ease;
}

.button:hover {
  opacity: 0.9;
}

.primary {
  background: [[ colors.hex ]];
  color: #ffffff;
}

.secondary {
  background: transparent;
  border: 1px solid [[ colors.hex ]];
  color: [[ colors.hex ]];
}
""",
    "styling/modules/Card.tsx": """\
import type { ReactNode } from 'react';

import styles from './Card.module.css';

export function Card({ title, children }: { title: string; children: ReactNode }) {
  return (
    <section className={styles.card}>
      <h3 className={styles.title}>{title}</h3>
      <div>{children}</div>
    </section>
  );
}
""",
    "styling/modules/Card.module.css": """\
.card {
  border: 1px solid #e5e7eb;
  border-radius: 0.75rem;
  padding: 1.5rem;
  background: #ffffff;
  box-shadow: 0 1px 2px rgba(0, 0, 0, 0.05);
}

.title {
  margin-bottom: 0.75rem;
  font-size: 1.25rem;
  font-weight: 600;
}
""",
    "styling/modules/showcase.tsx": """\
import { Button } from '@/components/Button';
import { Card } from '@/components/Card';

import styles from './page.module.css';

export default function ComponentsPage() {
  return (
    <main className={styles.container}>
      <h1>[[ display_name ]] components</h1>
      <Card title="Buttons">
        <div className={styles.row}>
          <Button>Primary</Button>
          <Button variant="secondary">Secondary</Button>
        </div>
      </Card>
    </main>
  );
}
""",
    "styling/modules/showcase.module.css": """\
.container {
  margin: 0 auto;
  max-width: 48rem;
  padding: 2rem;
  display: grid;
  gap: 1.5rem;
}

.row {
  display: flex;
  gap: 1rem;
}
""",
    "styling/styled/theme.ts": """\
export const theme = {
  colors: {
    primary: '[[ colors.hex ]]',
    text: '#111827',
    muted: '#6b7280',
    background: '#ffffff',
    border: '#e5e7eb',
  },
  radii: {
    md: '0.5rem',
    lg: '0.75rem',
  },
  spacing: (factor: number) => `${factor * 0.25}rem`,
};

export type Theme = typeof theme;
""",
    "styling/styled/global-styles.ts": """\
'use client';

import { createGlobalStyle } from 'styled-components';

export const GlobalStyles = createGlobalStyle`
  *, *::before, *::after {
    box-sizing: border-box;
  }

  body {
    margin: 0;
    font-family: system-ui, -apple-system, sans-serif;
    color: ${({ theme }) => theme.colors.text};
    background: ${({ theme }) => theme.colors.background};
  }
`;
""",
    "styling/styled/provider.tsx": """\
'use client';

import type { ReactNode } from 'react';
import { ThemeProvider } from 'styled-components';

import { GlobalStyles } from './global-styles';
import StyledComponentsRegistry from './registry';
import { theme } from './theme';

export function StyledComponentsProvider({ children }: { children: ReactNode }) {
  return (
    <StyledComponentsRegistry>
      <ThemeProvider theme={theme}>
        <GlobalStyles />
        {children}
      </ThemeProvider>
    </StyledComponentsRegistry>
  );
}
""",
    "styling/styled/registry.tsx": """\
'use client';

import { useServerInsertedHTML } from 'next/navigation';
import { useState, type ReactNode } from 'react';
import { ServerStyleSheet, StyleSheetManager } from 'styled-components';

export default function StyledComponentsRegistry({ children }: { children: ReactNode }) {
  const [sheet] = useState(() => new ServerStyleSheet());

  useServerInsertedHTML(() => {
    const styles = sheet.getStyleElement();
    sheet.instance.clearTag();
    return <>{styles}</>;
  });

  if (typeof window !== 'undefined') {
    return <>{children}</>;
  }

  return <StyleSheetManager sheet={sheet.instance}>{children}</StyleSheetManager>;
}
""",
    "styling/styled/Button.tsx": """\
'use client';

import styled from 'styled-components';

export const Button = styled.button<{ $variant?: 'primary' | 'secondary' }>`
  border-radius: ${({ theme }) => theme.radii.md};
  padding: ${({ theme }) => `${theme.spacing(2.5)} ${theme.spacing(5)}`};
  font-weight: 600;
  cursor: pointer;
  border: 1px solid ${({ theme }) => theme.colors.primary};
  background: ${({ theme, $variant }) =>
    $variant === 'secondary' ? 'transparent' : theme.colors.primary};
  color: ${({ theme, $variant }) =>
    $variant === 'secondary' ? theme.colors.primary : '#ffffff'};
`;
""",
    "styling/styled/Card.tsx": """\
'use client';

import styled from 'styled-components';

export const Card = styled.section`
  border: 1px solid ${({ theme }) => theme.colors.border};
  border-radius: ${({ theme }) => theme.radii.lg};
  padding: ${({ theme }) => theme.spacing(6)};
  background: ${({ theme }) => theme.colors.background};
`;
""",
    "styling/styled/showcase.tsx": """\
'use client';

import { Button } from '@/components/Button';
import { Card } from '@/components/Card';

export default function ComponentsPage() {
  return (
    <main style={{ maxWidth: '48rem', margin: '0 auto', padding: '2rem' }}>
      <h1>[[ display_name ]] components</h1>
      <Card>
        <Button>Primary</Button> <Button $variant="secondary">Secondary</Button>
      </Card>
    </main>
  );
}
""",
}

registry.register_many(TEMPLATES)


def contribution(ctx: RenderContext) -> Contribution:
    """Packages and providers for the selected styling."""
    styling = ctx.config.styling
    if styling == "tailwind":
        dev = {
            "tailwindcss": "^3.4.15",
            "postcss": "^8.4.49",
            "autoprefixer": "^10.4.20",
        }
        deps: dict[str, str] = {}
        if ctx.config.shadcn:
            deps = {
                "@radix-ui/react-slot": "^1.1.0",
                "class-variance-authority": "^0.7.1",
                "clsx": "^2.1.1",
                "tailwind-merge": "^2.5.5",
            }
        return Contribution(dependencies=deps, dev_dependencies=dev)
    if styling == "styled-components":
        return Contribution(
            dependencies={"styled-components": "^6.1.13"},
            next_config={"compiler": "{ styledComponents: true }"},
            providers=[
                Provider(
                    import_line="import { StyledComponentsProvider } from '@/lib/styled-components-provider';",
                    open_tag="<StyledComponentsProvider>",
                    close_tag="</StyledComponentsProvider>",
                    order=10,
                )
            ],
        )
    return Contribution()


def render_styling(ctx: RenderContext) -> list[GeneratedFile]:
    """Styling files for a Next.js application."""
    styling = ctx.config.styling
    params = ctx.params(shadcn=ctx.config.shadcn, styling=styling)
    files = [
        ctx.file(
            ctx.src("app/globals.css"),
            registry.render("styling/globals.css", **params),
            "asset",
        )
    ]

    if styling == "tailwind":
        files.append(
            ctx.file(
                ctx.web("tailwind.config.ts"),
                registry.render("styling/tailwind.config.ts", **params),
                "config",
            )
        )
        files.append(
            ctx.file(
                ctx.web("postcss.config.mjs"),
                registry.render("styling/postcss.config.mjs"),
                "config",
            )
        )
        if ctx.config.shadcn:
            files.append(
                ctx.file(
                    ctx.web("components.json"),
                    registry.render("styling/components.json"),
                    "config",
                )
            )
            files.append(
                ctx.file(ctx.src("lib/utils.ts"), registry.render("styling/shadcn/utils.ts"))
            )
            for component in ("button", "card", "input"):
                files.append(
                    ctx.file(
                        ctx.src(f"components/ui/{component}.tsx"),
                        registry.render(f"styling/shadcn/{component}.tsx", **params),
                    )
                )
            files.append(
                ctx.file(
                    ctx.src("app/components/page.tsx"),
                    registry.render("styling/shadcn/showcase.tsx", **params),
                )
            )
    elif styling == "css-modules":
        files.append(
            ctx.file(
                ctx.src("app/page.module.css"),
                registry.render("styling/modules/page.module.css", **params),
                "asset",
            )
        )
        for name in ("Button.tsx", "Button.module.css", "Card.tsx", "Card.module.css"):
            files.append(
                ctx.file(
                    ctx.src(f"components/{name}"),
                    registry.render(f"styling/modules/{name}", **params),
                    "asset" if name.endswith(".css") else "source",
                )
            )
        files.append(
            ctx.file(
                ctx.src("app/components/page.tsx"),
                registry.render("styling/modules/showcase.tsx", **params),
            )
        )
        files.append(
            ctx.file(
                ctx.src("app/components/page.module.css"),
                registry.render("styling/modules/showcase.module.css"),
                "asset",
            )
        )
    elif styling == "styled-components":
        lib_files = {
            "lib/theme.ts": "styling/styled/theme.ts",
            "lib/global-styles.ts": "styling/styled/global-styles.ts",
            "lib/styled-components-provider.tsx": "styling/styled/provider.tsx",
            "lib/registry.tsx": "styling/styled/registry.tsx",
            "components/Button.tsx": "styling/styled/Button.tsx",
            "components/Card.tsx": "styling/styled/Card.tsx",
            "app/components/page.tsx": "styling/styled/showcase.tsx",
        }
        for relative, template in lib_files.items():
            files.append(ctx.file(ctx.src(relative), registry.render(template, **params)))

    return files
