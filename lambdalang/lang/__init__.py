"""Host glue: errors, builtins, sessions and the interactive shell."""
