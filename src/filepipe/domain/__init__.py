"""Pure domain logic: placeholders, templates, ids, and errors. No I/O."""
