"""Single-page application scaffolding for React, Vue, Svelte and Angular."""

from stackforge.generators.context import RenderContext
from stackforge.generators.renderers import tooling
from stackforge.generators.renderers.contributions import Contribution, merge_all
from stackforge.generators.renderers.manifest import feature_contribution, package_json
from stackforge.generators.templating import registry
from stackforge.models.generation import GeneratedFile

TEMPLATES = {
    "spa/index.html": """\
<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8" />
    <meta name="viewport" content="width=device-width, initial-scale=1.0" />
    <meta name="description" content="[[ description | e ]]" />
    <title>[[ display_name ]]</title>
  </head>
  <body>
[% if framework == "angular" %]
    <app-root></app-root>
[% elif framework == "react" %]
    <div id="root"></div>
[% else %]
    <div id="app"></div>
[% endif %]
[% if bundler == "vite" %]
    <script type="module" src="/src/[[ entry ]]"></script>
[% endif %]
  </body>
</html>
""",
    "spa/vite.config.ts": """\
import path from 'path';
import { defineConfig } from 'vite';
[% if framework == "react" %]
import react from '@vitejs/plugin-react';
[% elif framework == "vue" %]
import vue from '@vitejs/plugin-vue';
[% elif framework == "svelte" %]
import { svelte } from '@sveltejs/vite-plugin-svelte';
[% elif framework == "angular" %]
import angular from '@analogjs/vite-plugin-angular';
[% endif %]

export default defineConfig({
[% if framework == "react" %]
  plugins: [react()],
[% elif framework == "vue" %]
  plugins: [vue()],
[% elif framework == "svelte" %]
  plugins: [svelte()],
[% elif framework == "angular" %]
  plugins: [angular()],
[% endif %]
  resolve: {
    alias: {
      '@': path.resolve(__dirname, './src'),
    },
  },
  server: {
    port: 3000,
  },
  build: {
    outDir: 'dist',
    sourcemap: true,
  },
});
""",
    "spa/webpack.config.js": """\
const path = require('path');
const HtmlWebpackPlugin = require('html-webpack-plugin');
[% if framework == "vue" %]
const { VueLoaderPlugin } = require('vue-loader');
[% endif %]

module.exports = {
  entry: './src/[[ entry ]]',
  output: {
    path: path.resolve(__dirname, 'dist'),
    filename: '[name].[contenthash].js',
    clean: true,
  },
  resolve: {
    extensions: ['.ts', '.tsx', '.js'[% if framework == "vue" %], '.vue'[% elif framework == "svelte" %], '.svelte'[% endif %]],
    alias: {
      '@': path.resolve(__dirname, 'src'),
    },
[% if framework == "svelte" %]
    mainFields: ['svelte', 'browser', 'module', 'main'],
    conditionNames: ['svelte', 'browser', 'import'],
[% endif %]
  },
  module: {
    rules: [
[% if framework == "vue" %]
      { test: /\\.vue$/, loader: 'vue-loader' },
      {
        test: /\\.ts$/,
        loader: 'ts-loader',
        exclude: /node_modules/,
        options: { appendTsSuffixTo: [/\\.vue$/] },
      },
[% elif framework == "svelte" %]
      {
        test: /\\.svelte$/,
        use: { loader: 'svelte-loader', options: { preprocess: require('svelte-preprocess')() } },
      },
      { test: /\\.ts$/, loader: 'ts-loader', exclude: /node_modules/ },
[% else %]
      { test: /\\.tsx?$/, loader: 'ts-loader', exclude: /node_modules/ },
[% endif %]
      {
        test: /\\.css$/,
        use: ['style-loader', 'css-loader'[% if tailwind %], 'postcss-loader'[% endif %]],
      },
    ],
  },
  plugins: [
    new HtmlWebpackPlugin({ template: './index.html' }),
[% if framework == "vue" %]
    new VueLoaderPlugin(),
[% endif %]
  ],
  devServer: {
    port: 3000,
    historyApiFallback: true,
  },
};
""",
    "spa/tailwind.config.ts": """\
import type { Config } from 'tailwindcss';

const config: Config = {
  content: ['./index.html', './src/**/*.{js,ts,jsx,tsx,vue,svelte,html}'],
  theme: {
    extend: {
      colors: {
        brand: '[[ colors.hex ]]',
      },
    },
  },
  plugins: [],
};

export default config;
""",
    "spa/react/main.tsx": """\
import React from 'react';
import ReactDOM from 'react-dom/client';

import App from './App';
import './index.css';

ReactDOM.createRoot(document.getElementById('root')!).render(
  <React.StrictMode>
    <App />
  </React.StrictMode>
);
""",
    "spa/react/App.tsx": """\
const stack = [
[% for label, value in stack %]
  { label: '[[ label ]]', value: '[[ value ]]' },
[% endfor %]
];

export default function App() {
  return (
    <main className="flex min-h-screen items-center justify-center p-8">
      <div className="w-full max-w-4xl">
        <h1 className="mb-4 text-4xl font-bold text-[[ colors.primary ]]">Welcome to [[ display_name ]]</h1>
        <p className="mb-8 text-lg">{[[ description | tojson ]]}</p>
        <div className="grid grid-cols-1 gap-4 md:grid-cols-2">
          {stack.map((item) => (
            <div key={item.label} className="rounded-lg border p-6">
              <h2 className="mb-2 text-xl font-semibold">{item.label}</h2>
              <p>{item.value}</p>
            </div>
          ))}
        </div>
      </div>
    </main>
  );
}
""",
    "spa/vue/main.ts": """\
import { createApp } from 'vue';

import App from './App.vue';
import './index.css';

createApp(App).mount('#app');
""",
    "spa/vue/App.vue": """\
<script setup lang="ts">
const description = [[ description | tojson ]];
const stack = [
[% for label, value in stack %]
  { label: '[[ label ]]', value: '[[ value ]]' },
[% endfor %]
];
</script>

<template>
  <main class="page">
    <h1>Welcome to [[ display_name ]]</h1>
    <p>{{ description }}</p>
    <ul>
      <li v-for="item in stack" :key="item.label">
        <strong>{{ item.label }}:</strong> {{ item.value }}
      </li>
    </ul>
  </main>
</template>

<style scoped>
.page {
  max-width: 56rem;
  margin: 0 auto;
  padding: 2rem;
}

h1 {
  color: [[ colors.hex ]];
}
</style>
""",
    "spa/vue/env.d.ts": """\
/// <reference types="vite/client" />

declare module '*.vue' {
  import type { DefineComponent } from 'vue';
  const component: DefineComponent<object, object, unknown>;
  export default component;
}
""",
    "spa/svelte/main.ts": """\
import { mount } from 'svelte';

import App from './App.svelte';
import './index.css';

const app = mount(App, { target: document.getElementById('app')! });

export default app;
""",
    "spa/svelte/App.svelte": """\
<script lang="ts">
  const description = [[ description | tojson ]];
  const stack = [
[% for label, value in stack %]
    { label: '[[ label ]]', value: '[[ value ]]' },
[% endfor %]
  ];
</script>

<main>
  <h1>Welcome to [[ display_name ]]</h1>
  <p>{description}</p>
  <ul>
    {#each stack as item (item.label)}
      <li><strong>{item.label}:</strong> {item.value}</li>
    {/each}
  </ul>
</main>

<style>
  main {
    max-width: 56rem;
    margin: 0 auto;
    padding: 2rem;
  }

  h1 {
    color: [[ colors.hex ]];
  }
</style>
""",
    "spa/svelte/svelte.config.js": """\
import { vitePreprocess } from '@sveltejs/vite-plugin-svelte';

export default {
  preprocess: vitePreprocess(),
};
""",
    "spa/angular/main.ts": """\
import 'zone.js';
import { bootstrapApplication } from '@angular/platform-browser';

import { AppComponent } from './app/app.component';
import './index.css';

bootstrapApplication(AppComponent).catch((error) => console.error(error));
""",
    "spa/angular/app.component.ts": """\
import { Component } from '@angular/core';

@Component({
  selector: 'app-root',
  standalone: true,
  template: `
    <main class="page">
      <h1>Welcome to [[ display_name ]]</h1>
      <p>{{ description }}</p>
      <ul>
        @for (item of stack; track item.label) {
          <li><strong>{{ item.label }}:</strong> {{ item.value }}</li>
        }
      </ul>
    </main>
  `,
  styles: [
    '.page { max-width: 56rem; margin: 0 auto; padding: 2rem; }',
    'h1 { color: [[ colors.hex ]]; }',
  ],
})
export class AppComponent {
  description = [[ description | tojson ]];
  stack = [
[% for label, value in stack %]
    { label: '[[ label ]]', value: '[[ value ]]' },
[% endfor %]
  ];
}
""",
}

registry.register_many(TEMPLATES)

# (entry file, dependencies, dev dependencies) per framework
_FRAMEWORKS = {
    "react": (
        "main.tsx",
        {"react": "^19.0.0", "react-dom": "^19.0.0"},
        {"@types/react": "^19.0.0", "@types/react-dom": "^19.0.0"},
    ),
    "vue": ("main.ts", {"vue": "^3.5.13"}, {"vue-tsc": "^2.1.10"}),
    "svelte": ("main.ts", {"svelte": "^5.2.9"}, {"svelte-check": "^4.1.0"}),
    "angular": (
        "main.ts",
        {
            "@angular/common": "^19.0.0",
            "@angular/compiler": "^19.0.0",
            "@angular/core": "^19.0.0",
            "@angular/platform-browser": "^19.0.0",
            "rxjs": "^7.8.1",
            "tslib": "^2.8.1",
            "zone.js": "^0.15.0",
        },
        {},
    ),
}

_VITE_PLUGINS = {
    "react": {"@vitejs/plugin-react": "^4.3.4"},
    "vue": {"@vitejs/plugin-vue": "^5.2.1"},
    "svelte": {"@sveltejs/vite-plugin-svelte": "^5.0.1"},
    "angular": {"@analogjs/vite-plugin-angular": "^1.10.0"},
}

_WEBPACK_LOADERS = {
    "react": {"ts-loader": "^9.5.1"},
    "vue": {"ts-loader": "^9.5.1", "vue-loader": "^17.4.2"},
    "svelte": {"ts-loader": "^9.5.1", "svelte-loader": "^3.2.4", "svelte-preprocess": "^6.0.3"},
    "angular": {"ts-loader": "^9.5.1"},
}


def bundler(ctx: RenderContext) -> str:
    """Concrete bundler, with ``auto`` resolving to vite."""
    return "webpack" if ctx.config.build_tool == "webpack" else "vite"


def spa_framework(ctx: RenderContext) -> str:
    frontend = ctx.config.frontend_framework
    return frontend if frontend in _FRAMEWORKS else "react"


def _stack_summary(ctx: RenderContext) -> list[tuple[str, str]]:
    return [
        ("Frontend Framework", spa_framework(ctx)),
        ("Build Tool", bundler(ctx)),
        ("Styling", ctx.config.styling),
        ("Project Structure", ctx.structure),
    ]


def _bundler_contribution(ctx: RenderContext) -> Contribution:
    framework = spa_framework(ctx)
    tailwind = ctx.config.styling == "tailwind"
    if bundler(ctx) == "vite":
        return Contribution(
            dev_dependencies={"vite": "^6.0.1", **_VITE_PLUGINS[framework]},
            scripts={
                "dev": "vite",
                "build": "vite build",
                "preview": "vite preview",
                "lint": "eslint .",
            },
        )
    dev = {
        "webpack": "^5.96.1",
        "webpack-cli": "^5.1.4",
        "webpack-dev-server": "^5.1.0",
        "html-webpack-plugin": "^5.6.3",
        "css-loader": "^7.1.2",
        "style-loader": "^4.0.0",
        **_WEBPACK_LOADERS[framework],
    }
    if tailwind:
        dev["postcss-loader"] = "^8.1.1"
    return Contribution(
        dev_dependencies=dev,
        scripts={
            "dev": "webpack serve --mode development",
            "build": "webpack --mode production",
            "preview": "webpack serve --mode production",
            "lint": "eslint .",
        },
    )


def _styling_contribution(ctx: RenderContext) -> Contribution:
    styling = ctx.config.styling
    if styling == "tailwind":
        return Contribution(
            dev_dependencies={
                "tailwindcss": "^3.4.15",
                "postcss": "^8.4.49",
                "autoprefixer": "^10.4.20",
            }
        )
    if styling == "styled-components" and spa_framework(ctx) == "react":
        return Contribution(dependencies={"styled-components": "^6.1.13"})
    return Contribution()


def render_spa(ctx: RenderContext) -> list[GeneratedFile]:
    """Manifest, bundler config, HTML shell, entry and root component."""
    framework = spa_framework(ctx)
    tool = bundler(ctx)
    entry, dependencies, dev_dependencies = _FRAMEWORKS[framework]
    tailwind = ctx.config.styling == "tailwind"
    params = ctx.params(
        framework=framework,
        bundler=tool,
        entry=entry,
        tailwind=tailwind,
        stack=_stack_summary(ctx),
    )

    manifest = merge_all(
        [
            _bundler_contribution(ctx),
            _styling_contribution(ctx),
            feature_contribution(ctx),
            tooling.contribution(ctx),
        ]
    )
    files = [
        ctx.file(
            "package.json",
            package_json(
                ctx.project_name,
                {},
                manifest,
                dependencies=dependencies,
                dev_dependencies=dev_dependencies,
                type="module" if tool == "vite" else "commonjs",
            ),
            "config",
        ),
        ctx.file("index.html", registry.render("spa/index.html", **params), "asset"),
    ]

    if tool == "vite":
        files.append(ctx.file("vite.config.ts", registry.render("spa/vite.config.ts", **params), "config"))
    else:
        files.append(
            ctx.file("webpack.config.js", registry.render("spa/webpack.config.js", **params), "config")
        )

    if framework == "react":
        files += [
            ctx.file(ctx.src("main.tsx"), registry.render("spa/react/main.tsx")),
            ctx.file(ctx.src("App.tsx"), registry.render("spa/react/App.tsx", **params)),
        ]
    elif framework == "vue":
        files += [
            ctx.file(ctx.src("main.ts"), registry.render("spa/vue/main.ts")),
            ctx.file(ctx.src("App.vue"), registry.render("spa/vue/App.vue", **params)),
            ctx.file(ctx.src("env.d.ts"), registry.render("spa/vue/env.d.ts")),
        ]
    elif framework == "svelte":
        files += [
            ctx.file(ctx.src("main.ts"), registry.render("spa/svelte/main.ts")),
            ctx.file(ctx.src("App.svelte"), registry.render("spa/svelte/App.svelte", **params)),
        ]
        if tool == "vite":
            files.append(
                ctx.file("svelte.config.js", registry.render("spa/svelte/svelte.config.js"), "config")
            )
    elif framework == "angular":
        files += [
            ctx.file(ctx.src("main.ts"), registry.render("spa/angular/main.ts")),
            ctx.file(
                ctx.src("app/app.component.ts"),
                registry.render("spa/angular/app.component.ts", **params),
            ),
        ]

    files.append(
        ctx.file(
            ctx.src("index.css"),
            registry.render(
                "styling/globals.css",
                **ctx.params(shadcn=False, styling="tailwind" if tailwind else "plain"),
            ),
            "asset",
        )
    )
    if tailwind:
        files += [
            ctx.file("tailwind.config.ts", registry.render("spa/tailwind.config.ts", **params), "config"),
            ctx.file("postcss.config.mjs", registry.render("styling/postcss.config.mjs"), "config"),
        ]

    return files
