"""Suppression policy — which entry points are emitted into which artifact."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

# Entry points with no generated C stub (and therefore no generated host
# function either); their wrappers are written by hand.
C_SUPPRESSED: frozenset[str] = frozenset(
    {
        # class operations
        "DefineClass",
        # string operations
        "NewStringUTF",
        "GetStringChars",
        "ReleaseStringChars",
        "GetStringCritical",
        "ReleaseStringCritical",
        "GetStringRegion",
        "GetStringUTFChars",
        "ReleaseStringUTFChars",
        # array element access
        "GetBooleanArrayElements",
        "GetByteArrayElements",
        "GetCharArrayElements",
        "GetShortArrayElements",
        "GetIntArrayElements",
        "GetLongArrayElements",
        "GetFloatArrayElements",
        "GetDoubleArrayElements",
        "ReleaseBooleanArrayElements",
        "ReleaseByteArrayElements",
        "ReleaseCharArrayElements",
        "ReleaseShortArrayElements",
        "ReleaseIntArrayElements",
        "ReleaseLongArrayElements",
        "ReleaseFloatArrayElements",
        "ReleaseDoubleArrayElements",
        # registration
        "RegisterNatives",
        "UnregisterNatives",
        # references
        "GetObjectRefType",
    }
)

# Entry points that keep their generated C stub but get a hand-written host
# wrapper instead of a generated one.
HOST_SUPPRESSED: frozenset[str] = frozenset(
    {
        # string operations
        "NewString",
        "NewStringUTF",
        "GetStringUTFLength",
        "GetStringUTFRegion",
        # NIO
        "NewDirectByteBuffer",
        "GetDirectBufferAddress",
        "GetDirectBufferCapacity",
    }
)


class PolicyTables(BaseModel):
    """Immutable pair of suppression sets.

    ``c_suppressed`` gates both artifacts; ``host_suppressed`` additionally
    gates the host artifact only.
    """

    model_config = ConfigDict(frozen=True)

    c_suppressed: frozenset[str] = frozenset()
    host_suppressed: frozenset[str] = frozenset()

    def emits_c(self, name: str) -> bool:
        return name not in self.c_suppressed

    def emits_host(self, name: str) -> bool:
        return self.emits_c(name) and name not in self.host_suppressed


DEFAULT_POLICY = PolicyTables(c_suppressed=C_SUPPRESSED, host_suppressed=HOST_SUPPRESSED)
