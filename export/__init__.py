"""Assemble conversation turns into one Markdown document and deliver it."""
