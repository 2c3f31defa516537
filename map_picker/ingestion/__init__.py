"""
Ingestion layer: reads the on-disk catalog and play log into memory.

Submodules:
  catalog_json : JSON map catalog → validated ``Catalog``
  play_log     : append-only text log of selections, resolved to ``GameMap``
"""
