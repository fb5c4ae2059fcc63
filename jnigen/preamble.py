"""Fixed preambles and epilogues surrounding the generated blocks."""

from __future__ import annotations

from .codegen import CodeGen
from .ir import CType
from .policy import DEFAULT_POLICY, PolicyTables
from .types import (
    HANDLE_TYPE_NAMES,
    PRIMITIVES,
    Primitive,
    RenderTarget,
    host_handle_name,
    render_argument,
    render_result,
    render_type,
)

# JavaVM entry points and the double-pointer GetJavaVM, which the declaration
# grammar cannot express.
C_PREAMBLE = """\
#include <jni.h>
#include <stdlib.h>

static inline jint AttachCurrentThread(JavaVM *vm, JNIEnv **p_env) {
    return (*vm)->AttachCurrentThread(vm, (void **) p_env, NULL);
}

static inline jint AttachCurrentThreadAsDaemon(JavaVM *vm, JNIEnv **p_env) {
    return (*vm)->AttachCurrentThreadAsDaemon(vm, (void **) p_env, NULL);
}

static inline jint GetEnv(JavaVM *vm, JNIEnv **penv) {
    return (*vm)->GetEnv(vm, (void **) penv, JNI_VERSION_1_2);
}

static inline jint DetachCurrentThread(JavaVM *vm) {
    return (*vm)->DetachCurrentThread(vm);
}

static inline jint DestroyJavaVM(JavaVM *vm) {
    return (*vm)->DestroyJavaVM(vm);
}

static inline jint GetJavaVM(JNIEnv *env, JavaVM **vm) {
    return (*env)->GetJavaVM(env, vm);
}
"""

# Stand-ins for entry points whose generated C stub the policy suppresses.
C_FALLBACK_STUBS: dict[str, str] = {
    "GetObjectRefType": """\
static inline int GetObjectRefType(JNIEnv *env, jobject obj) {
    return (int) (*env)->GetObjectRefType(env, obj);
}
""",
    "NewStringUTF": """\
static inline jstring NewStringUTF(JNIEnv *env, char *utf) {
    return (*env)->NewStringUTF(env, utf);
}
""",
}

_GO_HEADER = """\
import "C"
import "unsafe"

const (
\tJNI_VERSION_1_1 = 0x00010001
\tJNI_VERSION_1_2 = 0x00010002
\tJNI_VERSION_1_4 = 0x00010004
\tJNI_VERSION_1_6 = 0x00010006

\tJNI_FALSE = 0
\tJNI_TRUE  = 1

\tJNI_OK        = 0    /* success */
\tJNI_ERR       = (-1) /* unknown error */
\tJNI_EDETACHED = (-2) /* thread detached from the VM */
\tJNI_EVERSION  = (-3) /* JNI version error */
\tJNI_ENOMEM    = (-4) /* not enough memory */
\tJNI_EEXIST    = (-5) /* VM already created */
\tJNI_EINVAL    = (-6) /* invalid arguments */

\tJNI_COMMIT = 1
\tJNI_ABORT  = 2
)

type RefType int

const (
\tInvalid RefType = iota
\tLocal
\tGlobal
\tWeakGlobal
)"""

_GO_RUNTIME = """\
// Jvalue is one jvalue union member stored as its raw bit pattern.
type Jvalue = uint64

type VM uintptr

func VMOf(vm *C.JavaVM) VM {
\treturn VM(uintptr(unsafe.Pointer(vm)))
}

func (vm VM) AttachCurrentThread() (Env, int) {
\tvar env *C.JNIEnv
\tret := int(C.AttachCurrentThread((*C.JavaVM)(unsafe.Pointer(vm)), &env))
\treturn EnvOf(env), ret
}

func (vm VM) AttachCurrentThreadAsDaemon() (Env, int) {
\tvar env *C.JNIEnv
\tret := int(C.AttachCurrentThreadAsDaemon((*C.JavaVM)(unsafe.Pointer(vm)), &env))
\treturn EnvOf(env), ret
}

func (vm VM) GetEnv() (Env, int) {
\tvar env *C.JNIEnv
\tret := int(C.GetEnv((*C.JavaVM)(unsafe.Pointer(vm)), &env))
\treturn EnvOf(env), ret
}

func (vm VM) DetachCurrentThread() int {
\treturn int(C.DetachCurrentThread((*C.JavaVM)(unsafe.Pointer(vm))))
}

func (vm VM) DestroyJavaVM() int {
\treturn int(C.DestroyJavaVM((*C.JavaVM)(unsafe.Pointer(vm))))
}

type Env uintptr

func EnvOf(env *C.JNIEnv) Env {
\treturn Env(uintptr(unsafe.Pointer(env)))
}

func CMalloc(capacity int) unsafe.Pointer {
\treturn C.malloc(C.size_t(capacity))
}

func CFree(p unsafe.Pointer) {
\tC.free(p)
}

func OfSlice(b []byte) unsafe.Pointer {
\treturn unsafe.Pointer(*(*uintptr)(unsafe.Pointer(&b)))
}

func (env Env) GetJavaVM() (VM, int) {
\tvar vm *C.JavaVM
\tret := int(C.GetJavaVM((*C.JNIEnv)(unsafe.Pointer(env)), &vm))
\treturn VMOf(vm), ret
}"""

# Stand-ins for entry points whose generated Go function the policy suppresses,
# keyed by entry point and paired with the C stub each one calls. NewString
# takes a Go string and goes through NewStringUTF.
GO_FALLBACK_WRAPPERS: dict[str, tuple[str, str]] = {
    "GetObjectRefType": (
        "GetObjectRefType",
        """\
func (env Env) GetObjectRefType(obj Jobject) RefType {
\treturn RefType(C.GetObjectRefType((*C.JNIEnv)(unsafe.Pointer(env)), C.jobject(unsafe.Pointer(obj))))
}""",
    ),
    "NewString": (
        "NewStringUTF",
        """\
func (env Env) NewString(s string) Jstring {
\tcstr_s := C.CString(s)
\tdefer C.free(unsafe.Pointer(cstr_s))
\treturn Jstring(uintptr(unsafe.Pointer(C.NewStringUTF((*C.JNIEnv)(unsafe.Pointer(env)), cstr_s))))
}""",
    ),
    "NewDirectByteBuffer": (
        "NewDirectByteBuffer",
        """\
func (env Env) NewDirectByteBuffer(address unsafe.Pointer, capacity int) Jobject {
\treturn Jobject(uintptr(unsafe.Pointer(C.NewDirectByteBuffer((*C.JNIEnv)(unsafe.Pointer(env)), address, C.jlong(capacity)))))
}""",
    ),
    "GetDirectBufferAddress": (
        "GetDirectBufferAddress",
        """\
func (env Env) GetDirectBufferAddress(buf Jobject) unsafe.Pointer {
\treturn C.GetDirectBufferAddress((*C.JNIEnv)(unsafe.Pointer(env)), C.jobject(unsafe.Pointer(buf)))
}""",
    ),
    "GetDirectBufferCapacity": (
        "GetDirectBufferCapacity",
        """\
func (env Env) GetDirectBufferCapacity(buf Jobject) int {
\treturn int(C.GetDirectBufferCapacity((*C.JNIEnv)(unsafe.Pointer(env)), C.jobject(unsafe.Pointer(buf))))
}""",
    ),
}

_STRING_READER_STUBS = ("GetStringUTFLength", "GetStringUTFRegion")

_GO_STRING_READER = """\
func (env Env) GetStringUTF(str Jstring) []byte {
\tjstr := C.jstring(unsafe.Pointer(str))
\tsize := C.GetStringUTFLength((*C.JNIEnv)(unsafe.Pointer(env)), jstr)
\tret := make([]byte, int(size))
\tC.GetStringUTFRegion((*C.JNIEnv)(unsafe.Pointer(env)), jstr, C.jsize(0), size, cmem(ret))
\treturn ret
}"""

_GO_CONVERSIONS = """\
func DoubleToUint64(f float64) uint64 {
\treturn *(*uint64)(unsafe.Pointer(&f))
}

func FloatToUint64(f float32) uint64 {
\treturn uint64(*(*uint32)(unsafe.Pointer(&f)))
}

func BooleanToUint64(b bool) uint64 {
\treturn uint64(cbool(b))
}

func cmem(b []byte) *C.char {
\treturn (*C.char)(unsafe.Pointer(*(*uintptr)(unsafe.Pointer(&b))))
}

func cbool(b bool) C.jboolean {
\tif b {
\t\treturn C.JNI_TRUE
\t}
\treturn C.JNI_FALSE
}

func cvals(v []Jvalue) *C.jvalue {
\tif len(v) == 0 {
\t\treturn nil
\t}
\treturn (*C.jvalue)(unsafe.Pointer(*(*uintptr)(unsafe.Pointer(&v))))
}"""

_ENV_ARG = render_argument(CType(type_name="JNIEnv", is_ptr=True), "env", RenderTarget.GO)


def has_c_stub(name: str, policy: PolicyTables) -> bool:
    """True when the C artifact defines *name*, generated or hand-written."""
    return policy.emits_c(name) or name in C_FALLBACK_STUBS


def c_preamble(policy: PolicyTables = DEFAULT_POLICY) -> str:
    """Includes, JavaVM stubs, and a stand-in for each suppressed fallback entry."""
    stubs = [stub for name, stub in C_FALLBACK_STUBS.items() if not policy.emits_c(name)]
    return "\n".join([C_PREAMBLE, *stubs])


def _element_getter(prim: Primitive, gen: CodeGen) -> None:
    array = CType(type_name=prim.array_type)
    elem = CType(type_name=prim.c_name)
    array_arg = render_argument(array, "array", RenderTarget.GO)
    header = (
        f"func (env Env) Get{prim.label}ArrayElement(array {render_type(array, RenderTarget.GO)}, "
        f"index int) {render_type(elem, RenderTarget.GO)} {{"
    )
    with gen.block(header):
        gen.line(f"var ret C.{prim.c_name}")
        gen.line(
            f"C.Get{prim.label}ArrayRegion({_ENV_ARG}, {array_arg}, "
            "C.jsize(index), C.jsize(1), &ret)"
        )
        gen.line(f"return {render_result(elem, 'ret', RenderTarget.GO)}")


def _element_setter(prim: Primitive, gen: CodeGen) -> None:
    array = CType(type_name=prim.array_type)
    elem = CType(type_name=prim.c_name)
    array_arg = render_argument(array, "array", RenderTarget.GO)
    header = (
        f"func (env Env) Set{prim.label}ArrayElement(array {render_type(array, RenderTarget.GO)}, "
        f"index int, v {render_type(elem, RenderTarget.GO)}) {{"
    )
    with gen.block(header):
        gen.line(f"cv := {render_argument(elem, 'v', RenderTarget.GO)}")
        gen.line(
            f"C.Set{prim.label}ArrayRegion({_ENV_ARG}, {array_arg}, "
            "C.jsize(index), C.jsize(1), &cv)"
        )


def host_preamble(gen: CodeGen, policy: PolicyTables = DEFAULT_POLICY) -> None:
    """Constants, handle aliases and hand-written wrappers, ahead of generated code."""
    gen.raw(_GO_HEADER)
    gen.line()
    gen.line("// Opaque handles to native references and member IDs.")
    with gen.block("type (", ")"):
        for type_name in HANDLE_TYPE_NAMES:
            gen.line(f"{host_handle_name(type_name)} uintptr")
    gen.line()
    gen.raw(_GO_RUNTIME)
    for name, (c_stub, wrapper) in GO_FALLBACK_WRAPPERS.items():
        if not policy.emits_host(name) and has_c_stub(c_stub, policy):
            gen.line()
            gen.raw(wrapper)
    if all(has_c_stub(name, policy) for name in _STRING_READER_STUBS):
        gen.line()
        gen.raw(_GO_STRING_READER)
    gen.line()
    for prim in PRIMITIVES:
        if has_c_stub(f"Get{prim.label}ArrayRegion", policy):
            _element_getter(prim, gen)
            gen.line()
    for prim in PRIMITIVES:
        if has_c_stub(f"Set{prim.label}ArrayRegion", policy):
            _element_setter(prim, gen)
            gen.line()


def host_epilogue(gen: CodeGen) -> None:
    """Conversion helpers referenced by the generated functions."""
    gen.raw(_GO_CONVERSIONS)
    for prim in PRIMITIVES:
        gen.line()
        with gen.block(f"func {prim.array_helper}(a []{prim.host_element}) *C.{prim.c_name} {{"):
            gen.line(f"return (*C.{prim.c_name})(unsafe.Pointer(*(*uintptr)(unsafe.Pointer(&a))))")
