"""
Exclusion Rules service package.

This package decides whether incoming records are invalid according to
a set of stored exclusion rules. It provides:

- app.rules: Rule model, value parsing, predicate compilation, field
  access and the evaluation engine.
- app.persistence: Rule stores (memory, JSON file, PostgreSQL).
- app.service: Service wiring a rule store to the engine.

Guidelines:
- The compiled rule set is immutable; reloads replace it as a whole.
- A rule that cannot be compiled rejects the whole batch.
- A rule naming a field the record lacks is an error, never a pass.
"""
