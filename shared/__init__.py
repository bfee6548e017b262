# Shared kernel: domain exceptions, cache wrapper, API helpers
