"""Domain-independent building blocks: errors, security, time and paging helpers."""
