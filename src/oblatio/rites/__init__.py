"""
Rites - Workflow implementations for the Oblatio CLI.

Each module corresponds to a top-level CLI command:
- session: Interactive charity session (deployer creates / views
           campaigns, users donate)
- batch:   Fixed bookstore script (add, read, and buy a book)
"""
