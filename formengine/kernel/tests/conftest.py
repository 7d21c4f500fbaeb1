"""
Form kernel test configuration.

Kernel tests use MemoryStorage and function-scoped event loops; nothing
here touches the network.
"""
