"""reclaimctl - Age-based disk space reclamation for Windows servers.

Sweeps temp folders, the ConfigMgr client cache and arbitrary directory
trees for aged entries, deleting them bottom-up and reporting what was
reclaimed.
"""

__version__ = "0.3.0"
