"""learnlog: a personal learning journal API."""
