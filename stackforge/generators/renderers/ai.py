"""AI feature templates.

Every template emits a route handler, a page and the shared provider client.
``ai_file_paths`` is the single source for which paths those are; the setup
guide lists exactly these paths.
"""

from stackforge.generators.catalog import AI_PROVIDERS, AI_TEMPLATES
from stackforge.generators.context import RenderContext
from stackforge.generators.renderers.contributions import Contribution
from stackforge.generators.templating import registry
from stackforge.models.generation import GeneratedFile

_MESSAGE_TYPES = """\
export type ChatMessage = { role: 'user' | 'assistant'; content: string };

export type CompletionOptions = {
  system?: string;
  maxTokens?: number;
};

export const MODEL = process.env.AI_MODEL ?? '[[ provider.default_model ]]';
"""

TEMPLATES = {
    "ai/client/anthropic.ts": """\
import Anthropic from '@anthropic-ai/sdk';

"""
    + _MESSAGE_TYPES
    + """
const client = new Anthropic({ apiKey: process.env.[[ provider.env_var ]] });

export async function complete(messages: ChatMessage[], options: CompletionOptions = {}) {
  const response = await client.messages.create({
    model: MODEL,
    max_tokens: options.maxTokens ?? 1024,
    system: options.system,
    messages,
  });
  return response.content
    .map((block) => (block.type === 'text' ? block.text : ''))
    .join('');
}

export async function* stream(messages: ChatMessage[], options: CompletionOptions = {}) {
  const response = client.messages.stream({
    model: MODEL,
    max_tokens: options.maxTokens ?? 1024,
    system: options.system,
    messages,
  });
  for await (const event of response) {
    if (event.type === 'content_block_delta' && event.delta.type === 'text_delta') {
      yield event.delta.text;
    }
  }
}
""",
    "ai/client/openai.ts": """\
import OpenAI from 'openai';

"""
    + _MESSAGE_TYPES
    + """
const client = new OpenAI({ apiKey: process.env.[[ provider.env_var ]] });

function toOpenAI(messages: ChatMessage[], system?: string) {
  return [
    ...(system ? [{ role: 'system' as const, content: system }] : []),
    ...messages,
  ];
}

export async function complete(messages: ChatMessage[], options: CompletionOptions = {}) {
  const response = await client.chat.completions.create({
    model: MODEL,
    max_tokens: options.maxTokens ?? 1024,
    messages: toOpenAI(messages, options.system),
  });
  return response.choices[0]?.message?.content ?? '';
}

export async function* stream(messages: ChatMessage[], options: CompletionOptions = {}) {
  const response = await client.chat.completions.create({
    model: MODEL,
    max_tokens: options.maxTokens ?? 1024,
    messages: toOpenAI(messages, options.system),
    stream: true,
  });
  for await (const chunk of response) {
    const text = chunk.choices[0]?.delta?.content;
    if (text) {
      yield text;
    }
  }
}
""",
    "ai/client/aws-bedrock.ts": """\
import {
  BedrockRuntimeClient,
  ConverseCommand,
  ConverseStreamCommand,
} from '@aws-sdk/client-bedrock-runtime';

"""
    + _MESSAGE_TYPES
    + """
// Credentials come from the standard AWS chain; [[ provider.env_var ]] names the profile in use.
const client = new BedrockRuntimeClient({ region: process.env.AWS_REGION ?? 'us-east-1' });

function toBedrock(messages: ChatMessage[]) {
  return messages.map((message) => ({
    role: message.role,
    content: [{ text: message.content }],
  }));
}

export async function complete(messages: ChatMessage[], options: CompletionOptions = {}) {
  const response = await client.send(
    new ConverseCommand({
      modelId: MODEL,
      messages: toBedrock(messages),
      system: options.system ? [{ text: options.system }] : undefined,
      inferenceConfig: { maxTokens: options.maxTokens ?? 1024 },
    })
  );
  return response.output?.message?.content?.map((block) => block.text ?? '').join('') ?? '';
}

export async function* stream(messages: ChatMessage[], options: CompletionOptions = {}) {
  const response = await client.send(
    new ConverseStreamCommand({
      modelId: MODEL,
      messages: toBedrock(messages),
      system: options.system ? [{ text: options.system }] : undefined,
      inferenceConfig: { maxTokens: options.maxTokens ?? 1024 },
    })
  );
  for await (const event of response.stream ?? []) {
    const text = event.contentBlockDelta?.delta?.text;
    if (text) {
      yield text;
    }
  }
}
""",
    "ai/client/gemini.ts": """\
import { GoogleGenerativeAI } from '@google/generative-ai';

"""
    + _MESSAGE_TYPES
    + """
const genAI = new GoogleGenerativeAI(process.env.[[ provider.env_var ]] ?? '');

function toGemini(messages: ChatMessage[]) {
  return messages.map((message) => ({
    role: message.role === 'assistant' ? 'model' : 'user',
    parts: [{ text: message.content }],
  }));
}

export async function complete(messages: ChatMessage[], options: CompletionOptions = {}) {
  const model = genAI.getGenerativeModel({ model: MODEL, systemInstruction: options.system });
  const result = await model.generateContent({
    contents: toGemini(messages),
    generationConfig: { maxOutputTokens: options.maxTokens ?? 1024 },
  });
  return result.response.text();
}

export async function* stream(messages: ChatMessage[], options: CompletionOptions = {}) {
  const model = genAI.getGenerativeModel({ model: MODEL, systemInstruction: options.system });
  const result = await model.generateContentStream({
    contents: toGemini(messages),
    generationConfig: { maxOutputTokens: options.maxTokens ?? 1024 },
  });
  for await (const chunk of result.stream) {
    yield chunk.text();
  }
}
""",
    "ai/route/chatbot.ts": """\
import { stream, type ChatMessage } from '@/lib/ai-client';

export const runtime = 'nodejs';

export async function POST(request: Request) {
  const { messages } = (await request.json()) as { messages: ChatMessage[] };

  if (!Array.isArray(messages) || messages.length === 0) {
    return Response.json({ error: 'messages are required' }, { status: 400 });
  }

  const encoder = new TextEncoder();
  const body = new ReadableStream({
    async start(controller) {
      try {
        for await (const text of stream(messages, {
          system: 'You are the helpful assistant for [[ display_name ]].',
        })) {
          controller.enqueue(encoder.encode(text));
        }
      } catch (error) {
        controller.error(error);
        return;
      }
      controller.close();
    },
  });

  return new Response(body, { headers: { 'Content-Type': 'text/plain; charset=utf-8' } });
}
""",
    "ai/route/document-analyzer.ts": """\
import { complete } from '@/lib/ai-client';

const SYSTEM = `You analyze documents. Reply with JSON:
{"summary": string, "keyPoints": string[], "answer": string | null}`;

export async function POST(request: Request) {
  const { document, question } = (await request.json()) as {
    document?: string;
    question?: string;
  };

  if (!document) {
    return Response.json({ error: 'document is required' }, { status: 400 });
  }

  const prompt = question
    ? `Document:\\n${document}\\n\\nQuestion: ${question}`
    : `Document:\\n${document}`;
  const text = await complete([{ role: 'user', content: prompt }], { system: SYSTEM, maxTokens: 2048 });

  try {
    return Response.json(JSON.parse(text));
  } catch {
    return Response.json({ summary: text, keyPoints: [], answer: null });
  }
}
""",
    "ai/route/semantic-search.ts": """\
import { complete } from '@/lib/ai-client';

type Document = { id: string; title: string; content: string };

const DOCUMENTS: Document[] = [
  { id: '1', title: 'Getting started', content: 'Install dependencies and run the dev server.' },
  { id: '2', title: 'Deployment', content: 'Deploy to your hosting provider of choice.' },
  { id: '3', title: 'Authentication', content: 'Configure sign-in providers and sessions.' },
];

export async function POST(request: Request) {
  const { query } = (await request.json()) as { query?: string };
  if (!query) {
    return Response.json({ error: 'query is required' }, { status: 400 });
  }

  const catalog = DOCUMENTS.map((doc) => `${doc.id}: ${doc.title} - ${doc.content}`).join('\\n');
  const text = await complete(
    [{ role: 'user', content: `Query: ${query}\\n\\nDocuments:\\n${catalog}` }],
    {
      system:
        'Rank the documents by relevance to the query. Reply with JSON: [{"id": string, "score": number}]',
    }
  );

  let ranking: { id: string; score: number }[] = [];
  try {
    ranking = JSON.parse(text);
  } catch {
    ranking = [];
  }

  const results = ranking
    .map(({ id, score }) => ({ ...DOCUMENTS.find((doc) => doc.id === id), score }))
    .filter((result) => result.id);

  return Response.json({ query, results });
}
""",
    "ai/route/code-assistant.ts": """\
import { complete } from '@/lib/ai-client';

const MODES = {
  explain: 'Explain what this code does, step by step.',
  review: 'Review this code for bugs, security issues and style problems.',
  refactor: 'Refactor this code for readability. Return only the new code.',
} as const;

export async function POST(request: Request) {
  const { code, language, mode } = (await request.json()) as {
    code?: string;
    language?: string;
    mode?: keyof typeof MODES;
  };

  if (!code) {
    return Response.json({ error: 'code is required' }, { status: 400 });
  }

  const instruction = MODES[mode ?? 'explain'];
  const result = await complete(
    [{ role: 'user', content: `${instruction}\\n\\n\\`\\`\\`${language ?? ''}\\n${code}\\n\\`\\`\\`` }],
    { system: 'You are an expert software engineer.', maxTokens: 2048 }
  );

  return Response.json({ result });
}
""",
    "ai/route/image-generator.ts": """\
import { complete } from '@/lib/ai-client';

const STYLES = ['photorealistic', 'illustration', 'watercolor', 'pixel-art'] as const;

export async function POST(request: Request) {
  const { idea, style } = (await request.json()) as {
    idea?: string;
    style?: (typeof STYLES)[number];
  };

  if (!idea) {
    return Response.json({ error: 'idea is required' }, { status: 400 });
  }

  const prompt = await complete(
    [
      {
        role: 'user',
        content: `Write one detailed image-generation prompt (${style ?? 'photorealistic'} style) for: ${idea}`,
      },
    ],
    { maxTokens: 300 }
  );

  // Hand the enhanced prompt to your image model of choice.
  const imageUrl = `https://placehold.co/1024x1024?text=${encodeURIComponent(idea)}`;

  return Response.json({ prompt, imageUrl, styles: STYLES });
}
""",
    "ai/page/chatbot.tsx": """\
'use client';

import { useState, type FormEvent } from 'react';

type Message = { role: 'user' | 'assistant'; content: string };

export default function ChatPage() {
  const [messages, setMessages] = useState<Message[]>([]);
  const [input, setInput] = useState('');
  const [busy, setBusy] = useState(false);

  async function send(event: FormEvent) {
    event.preventDefault();
    if (!input.trim() || busy) return;

    const next: Message[] = [...messages, { role: 'user', content: input }];
    setMessages([...next, { role: 'assistant', content: '' }]);
    setInput('');
    setBusy(true);

    const response = await fetch('/api/[[ route ]]', {
      method: 'POST',
      headers: { 'Content-Type': 'application/json' },
      body: JSON.stringify({ messages: next }),
    });

    const reader = response.body?.getReader();
    const decoder = new TextDecoder();
    let reply = '';
    while (reader) {
      const { done, value } = await reader.read();
      if (done) break;
      reply += decoder.decode(value, { stream: true });
      setMessages([...next, { role: 'assistant', content: reply }]);
    }
    setBusy(false);
  }

  return (
    <main className="mx-auto flex h-screen max-w-3xl flex-col p-6">
      <h1 className="mb-4 text-2xl font-bold">[[ template.title ]]</h1>
      <div className="flex-1 space-y-3 overflow-y-auto">
        {messages.map((message, index) => (
          <div
            key={index}
            className={
              message.role === 'user'
                ? 'ml-auto max-w-[80%] rounded-lg bg-[[ colors.primary ]] p-3 text-white'
                : 'max-w-[80%] rounded-lg bg-[[ colors.surface ]] p-3'
            }
          >
            <p className="whitespace-pre-wrap">{message.content}</p>
          </div>
        ))}
      </div>
      <form onSubmit={send} className="mt-4 flex gap-2">
        <input
          className="flex-1 rounded border p-2"
          value={input}
          onChange={(e) => setInput(e.target.value)}
          placeholder="Ask anything..."
        />
        <button
          className="rounded bg-[[ colors.primary ]] px-4 text-white disabled:opacity-50"
          disabled={busy}
          type="submit"
        >
          Send
        </button>
      </form>
    </main>
  );
}
""",
    "ai/page/generic.tsx": """\
'use client';

import { useState, type FormEvent } from 'react';

export default function [[ template.title | pascal_case ]]Page() {
  const [input, setInput] = useState('');
  const [result, setResult] = useState<unknown>(null);
  const [busy, setBusy] = useState(false);

  async function submit(event: FormEvent) {
    event.preventDefault();
    setBusy(true);
    const response = await fetch('/api/[[ route ]]', {
      method: 'POST',
      headers: { 'Content-Type': 'application/json' },
      body: JSON.stringify({ [[ input_field ]]: input }),
    });
    setResult(await response.json());
    setBusy(false);
  }

  return (
    <main className="mx-auto max-w-3xl space-y-6 p-6">
      <header>
        <h1 className="text-2xl font-bold">[[ template.title ]]</h1>
        <p className="text-gray-600">[[ template.description ]]</p>
      </header>
      <form onSubmit={submit} className="space-y-3">
        <textarea
          className="h-40 w-full rounded border p-3 font-mono text-sm"
          value={input}
          onChange={(e) => setInput(e.target.value)}
          placeholder="[[ placeholder ]]"
        />
        <button
          className="rounded bg-[[ colors.primary ]] px-4 py-2 text-white hover:bg-[[ colors.primary_hover ]] disabled:opacity-50"
          disabled={busy || !input}
          type="submit"
        >
          {busy ? 'Working...' : 'Run'}
        </button>
      </form>
      {result ? (
        <pre className="overflow-x-auto rounded bg-[[ colors.surface ]] p-4 text-sm">
          {JSON.stringify(result, null, 2)}
        </pre>
      ) : null}
    </main>
  );
}
""",
}

registry.register_many(TEMPLATES)

# Request field and placeholder for the generic page per template
_PAGE_INPUTS = {
    "document-analyzer": ("document", "Paste a document to analyze..."),
    "semantic-search": ("query", "What are you looking for?"),
    "code-assistant": ("code", "Paste code to explain..."),
    "image-generator": ("idea", "A lighthouse at dusk..."),
}


def applies(ctx: RenderContext) -> bool:
    """AI features need both a frontend page and a server route host."""
    return ctx.config.ai_template != "none" and ctx.structure not in (
        "express-api-only",
        "react-spa",
    )


def ai_file_paths(ctx: RenderContext) -> list[str]:
    """Paths emitted for the selected AI template, in emission order."""
    if not applies(ctx):
        return []
    template = AI_TEMPLATES[ctx.config.ai_template]
    return [
        ctx.src("lib/ai-client.ts"),
        ctx.src(f"app/api/{template.route}/route.ts"),
        ctx.src(f"app/{template.page}/page.tsx"),
    ]


def ai_routes(ctx: RenderContext) -> tuple[list[str], list[str]]:
    """API routes and pages served by the AI template."""
    if not applies(ctx):
        return [], []
    template = AI_TEMPLATES[ctx.config.ai_template]
    return [f"/api/{template.route}"], [f"/{template.page}"]


def contribution(ctx: RenderContext) -> Contribution:
    if not applies(ctx):
        return Contribution()
    provider = AI_PROVIDERS[ctx.config.ai_provider]
    return Contribution(dependencies={provider.package: provider.package_version})


def render_ai(ctx: RenderContext) -> list[GeneratedFile]:
    """Provider client, API route and page for the AI template."""
    if not applies(ctx):
        return []
    key = ctx.config.ai_template
    template = AI_TEMPLATES[key]
    provider = AI_PROVIDERS[ctx.config.ai_provider]
    client_path, route_path, page_path = ai_file_paths(ctx)

    params = ctx.params(template=template, provider=provider, route=template.route)
    if key == "chatbot":
        page = registry.render("ai/page/chatbot.tsx", **params)
    else:
        input_field, placeholder = _PAGE_INPUTS[key]
        page = registry.render(
            "ai/page/generic.tsx",
            **params,
            input_field=input_field,
            placeholder=placeholder,
        )

    return [
        ctx.file(client_path, registry.render(f"ai/client/{ctx.config.ai_provider}.ts", **params)),
        ctx.file(route_path, registry.render(f"ai/route/{key}.ts", **params)),
        ctx.file(page_path, page),
    ]
