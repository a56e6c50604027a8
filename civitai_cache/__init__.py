"""
Top-level package for the Civitai model cache layout.

- `catalog`: catalog records, endpoint-variant reconciliation and
  identifier recovery
- `layout`: cache paths, media scanning and disk-presence checks
- `main`: FastAPI app exposing both to the UI / persistence services
"""
