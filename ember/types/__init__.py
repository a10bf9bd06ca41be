from ember.types.expression import (
    Expression,
    VoidType,
    VOID,
    Int,
    String,
    Var,
    FnCall,
    TRUE,
    FALSE,
    eql,
    boolean,
    from_python,
)
from ember.types.location import Location, Cursor
from ember.types.scope import Scope
from ember.types.native_fn import NativeFn, DefinedFn
from ember.types.environment import Environment
