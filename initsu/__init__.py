"""initsu -- interactive project scaffolder.

Creates Next.js or TypeScript projects, configures Prettier, ESLint, Husky
and shadcn/ui, and applies a starter template fetched from GitHub.
"""

__version__ = "1.0.0"
