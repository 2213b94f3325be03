from .seed_store import MotorSeedStore, SeedStore
