"""Cross-cutting helpers shared by every layer (logging, datetime, ids)."""
