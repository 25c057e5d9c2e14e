"""
Check propositional logic proofs as they are written: equivalence chains
and natural-deduction proofs worked forward or backward.
"""
#pylint:disable=wildcard-import
from .leaves import *
from .parser import *
from .labels import *
from .equivs import *
from .infers import *
from .proof import *
from .chain import *
from .snapshot import *
from .runner import *
from .editor import *

__version__ = "0.1.0"
