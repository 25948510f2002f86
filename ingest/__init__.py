"""Read a rendered chat page and convert assistant answers to Markdown."""
