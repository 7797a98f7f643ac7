"""
guides: the Markdown study-guide corpus: loading, manifest, search,
flashcards, study progress, and snippet linting.
"""
