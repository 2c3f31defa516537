"""
Simulation driver: replays many recommendation rounds from an empty play log
and tallies how often each map gets picked.  Used to sanity-check the
scoring curves against a real catalog.
"""
