"""
The MODEL layer contains pure data structures.
It has NO knowledge of threads, channels or image files.
It deals with configuration values, obstacle geometry and UI settings.
"""
