"""Fixed dataset loaded by the seeding job."""

SEED_SUBSCRIBERS: list[dict[str, str]] = [
    {"name": "Jeread Krus", "subscribedChannel": "CNET"},
    {"name": "John Doe", "subscribedChannel": "freeCodeCamp.org"},
    {"name": "Lucifer", "subscribedChannel": "Sentex"},
    {"name": "Ada Lovelace", "subscribedChannel": "Computerphile"},
    {"name": "Grace Hopper", "subscribedChannel": "Fireship"},
]
