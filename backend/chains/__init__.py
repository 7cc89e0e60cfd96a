"""Generation pipelines: prompt rendering, JSON recovery, per-use-case chains."""
