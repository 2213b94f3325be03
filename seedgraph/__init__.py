from .core.cache import SeedCache
from .core.schema_graph import build_graph
from .core.seed_engine import SeedEngine
from .dal.seed_store import MotorSeedStore, SeedStore
from .errors import SeedGraphError, SeedRunError, UnknownModelError
from .models import GraphNode, ModelDescriptor, ModelRegistry, PyObjectId, Ref, ReferenceEdge
from .seeds.bootstrap import run_seeds, seed_database
from .seeds.loader import load_seeds

__version__ = "0.1.0"
