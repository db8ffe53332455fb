"""
AI Module - Intent resolution for brand asset requests.

Architecture Overview:
=====================

    request text ──> IntentResolver ──> Intent
                        │
          ┌─────────────┼──────────────┐
          ▼             ▼              ▼
     LLM provider   extractors    keyword fallback
    (OpenAI/Gemini) + knowledge     (no KB)
                      base

Module Structure:
================
- intent/      Intent schemas, signal extractors, resolver
- providers/   OpenAI and Gemini JSON clients
- prompts/     Catalog-grounded prompt templates
- monitoring/  Structured logs + in-memory metrics
"""
