"""
Benchmark suite for sstr string operations.

Compares sstr against the builtin text types:
- str (codepoint-indexed text)
- bytes (raw UTF-8 buffers)

Measures operation speed and memory usage across different scripts.
"""
