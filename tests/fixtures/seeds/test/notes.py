# not a seed module: no `_seed` suffix
data = [{"first": "ignored"}]
