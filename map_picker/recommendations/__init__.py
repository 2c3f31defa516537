"""
Recommendation engine: turns the play history into a probability for every
eligible map and samples the maps offered to the players.

Modules
-------
scorer  : MapScoring dataclass + build_scores() + raw_scores(), pure
          functions, no I/O.
sampler : sample_without_replacement(): weighted draw of k distinct maps.
ranker  : recommend() + all_candidates() + default_mode(), the façade the
          CLI and simulation call.
"""
