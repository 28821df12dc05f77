"""Pure recurrence, completion and streak logic."""
