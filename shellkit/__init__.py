"""
Shellkit - terminal convenience commands.

Provides one console script with subcommands for:
- Killing processes by name with escalating signals
- Verifying GPG signatures and choosing keyservers
- Sorting a video collection through a yad picture preview loop
- Reminding the user of shell aliases they could have typed
"""

__version__ = "0.1.0"
