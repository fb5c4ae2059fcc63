"""Tests for C stub and Go binding rendering of single methods."""

import pytest

from jnigen.codegen import CodeGen
from jnigen.ir import CType, Method
from jnigen.parser import parse_declaration
from jnigen.signature import (
    HostStrategy,
    UnsupportedMethodError,
    c_signature,
    go_signature,
    host_call_args,
    host_params,
    host_strategy,
    render_c_stub,
    render_call_arg,
    render_go_func,
    render_param,
)
from jnigen.types import RenderTarget

FOO = "jint (JNICALL *Foo)(JNIEnv *env, jobject obj)"
BAR = "void (JNICALL *Bar)(JNIEnv *env, jobject obj, ...)"
GET_INT_REGION = (
    "void (JNICALL *GetIntArrayRegion)(JNIEnv *env, jintArray array, jsize start, jsize l, jint *buf)"
)
SET_INT_REGION = (
    "void (JNICALL *SetIntArrayRegion)(JNIEnv *env, jintArray array, jsize start, jsize l, const jint *buf)"
)
CALL_INT_A = (
    "jint (JNICALL *CallIntMethodA)(JNIEnv *env, jobject obj, jmethodID methodID, const jvalue *args)"
)
CRITICAL = "void * (JNICALL *GetPrimitiveArrayCritical)(JNIEnv *env, jarray array, jboolean *isCopy)"


def _c_stub(decl: str) -> str:
    gen = CodeGen()
    render_c_stub(parse_declaration(decl), gen)
    return gen.output()


def _go_func(decl: str) -> str:
    gen = CodeGen("\t")
    render_go_func(parse_declaration(decl), gen)
    return gen.output()


class TestRenderParam:
    def test_c_param(self):
        method = parse_declaration(FOO)
        assert render_param(method.params[0], RenderTarget.C) == "JNIEnv * env"

    def test_go_param(self):
        method = parse_declaration(FOO)
        assert render_param(method.params[1], RenderTarget.GO) == "obj Jobject"

    def test_is_copy_is_elided_from_both_targets(self):
        is_copy = parse_declaration(CRITICAL).params[-1]
        assert render_param(is_copy, RenderTarget.C) == ""
        assert render_param(is_copy, RenderTarget.GO) == ""

    def test_is_copy_call_arg(self):
        is_copy = parse_declaration(CRITICAL).params[-1]
        assert render_call_arg(is_copy, RenderTarget.C) == "NULL"
        assert render_call_arg(is_copy, RenderTarget.GO) == ""


class TestCStub:
    def test_forwards_through_function_table(self):
        assert _c_stub(FOO) == (
            "static inline jint Foo(JNIEnv * env, jobject obj) {\n"
            "    return (*env)->Foo(env, obj);\n"
            "}\n"
        )

    def test_void_return_has_no_return_keyword(self):
        assert _c_stub("void (JNICALL *ExceptionClear)(JNIEnv *env)") == (
            "static inline void ExceptionClear(JNIEnv * env) {\n"
            "    (*env)->ExceptionClear(env);\n"
            "}\n"
        )

    def test_is_copy_passes_null(self):
        assert _c_stub(CRITICAL) == (
            "static inline void * GetPrimitiveArrayCritical(JNIEnv * env, jarray array) {\n"
            "    return (*env)->GetPrimitiveArrayCritical(env, array, NULL);\n"
            "}\n"
        )

    def test_const_return_is_cast_away(self):
        stub = _c_stub(
            "const jchar *(JNICALL *GetStringChars)(JNIEnv *env, jstring str, jboolean *isCopy)"
        )
        assert "static inline jchar * GetStringChars(JNIEnv * env, jstring str) {" in stub
        assert "return (jchar *) (*env)->GetStringChars(env, str, NULL);" in stub

    def test_receiver_only_signature(self):
        assert c_signature(parse_declaration("jint (JNICALL *GetVersion)(JNIEnv *env)")) == (
            "static inline jint GetVersion(JNIEnv * env)"
        )

    def test_const_parameter_is_dropped(self):
        assert c_signature(parse_declaration(SET_INT_REGION)) == (
            "static inline void SetIntArrayRegion("
            "JNIEnv * env, jintArray array, jsize start, jsize l, jint * buf)"
        )


class TestGoFunc:
    def test_method_on_env(self):
        assert _go_func(FOO) == (
            "func (env Env) Foo(obj Jobject) int {\n"
            "\treturn int(C.Foo((*C.JNIEnv)(unsafe.Pointer(env)), C.jobject(unsafe.Pointer(obj))))\n"
            "}\n"
        )

    def test_receiver_only(self):
        assert go_signature(parse_declaration("jint (JNICALL *GetVersion)(JNIEnv *env)")) == (
            "func (env Env) GetVersion() int"
        )

    def test_void_return(self):
        assert _go_func("void (JNICALL *ExceptionClear)(JNIEnv *env)") == (
            "func (env Env) ExceptionClear() {\n"
            "\tC.ExceptionClear((*C.JNIEnv)(unsafe.Pointer(env)))\n"
            "}\n"
        )

    def test_string_parameter_is_converted_and_freed(self):
        lines = _go_func("jclass (JNICALL *FindClass)(JNIEnv *env, const char *name)").splitlines()
        assert lines == [
            "func (env Env) FindClass(name string) Jclass {",
            "\tcstr_name := C.CString(name)",
            "\tdefer C.free(unsafe.Pointer(cstr_name))",
            "\treturn Jclass(uintptr(unsafe.Pointer("
            "C.FindClass((*C.JNIEnv)(unsafe.Pointer(env)), cstr_name))))",
            "}",
        ]

    def test_boolean_parameter(self):
        method = parse_declaration(
            "jobject (JNICALL *ToReflectedMethod)(JNIEnv *env, jclass cls, jmethodID methodID, jboolean isStatic)"
        )
        assert host_params(method) == ["cls Jclass", "methodID JmethodID", "isStatic bool"]
        assert host_call_args(method)[-1] == "cbool(isStatic)"

    def test_is_copy_is_absent_from_host_call(self):
        method = parse_declaration(CRITICAL)
        assert host_params(method) == ["array Jarray"]
        assert host_call_args(method) == [
            "(*C.JNIEnv)(unsafe.Pointer(env))",
            "C.jarray(unsafe.Pointer(array))",
        ]


class TestHostStrategy:
    def test_direct(self):
        assert host_strategy(parse_declaration(FOO)) == HostStrategy.DIRECT

    def test_array_region(self):
        assert host_strategy(parse_declaration(GET_INT_REGION)) == HostStrategy.ARRAY_REGION

    def test_value_array_call(self):
        assert host_strategy(parse_declaration(CALL_INT_A)) == HostStrategy.VALUE_ARRAY_CALL


class TestArrayRegion:
    def test_host_params_take_a_slice(self):
        assert host_params(parse_declaration(GET_INT_REGION)) == [
            "array JintArray",
            "start int",
            "buf []int32",
        ]

    def test_length_is_derived_from_slice(self):
        assert host_call_args(parse_declaration(GET_INT_REGION)) == [
            "(*C.JNIEnv)(unsafe.Pointer(env))",
            "C.jintArray(unsafe.Pointer(array))",
            "C.jsize(start)",
            "C.jsize(len(buf))",
            "cIntArray(buf)",
        ]

    def test_get_and_set_share_shape(self):
        get = parse_declaration(GET_INT_REGION)
        put = parse_declaration(SET_INT_REGION)
        assert host_params(get) == host_params(put)
        assert host_call_args(get) == host_call_args(put)


class TestValueArrayCall:
    def test_host_params_end_in_variadic_values(self):
        assert host_params(parse_declaration(CALL_INT_A)) == [
            "obj Jobject",
            "methodID JmethodID",
            "args ...Jvalue",
        ]

    def test_values_are_packed(self):
        args = host_call_args(parse_declaration(CALL_INT_A))
        assert args[-1] == "cvals(args)"
        assert len(args) == 4


class TestUnsupported:
    def test_c_stub_rejects_variadic(self):
        with pytest.raises(UnsupportedMethodError):
            render_c_stub(parse_declaration(BAR), CodeGen())

    def test_go_func_rejects_variadic(self):
        with pytest.raises(UnsupportedMethodError):
            render_go_func(parse_declaration(BAR), CodeGen("\t"))

    def test_rejects_missing_handle(self):
        method = Method(name="Orphan", ret=CType(type_name="void"))
        with pytest.raises(UnsupportedMethodError):
            c_signature(method)

    def test_is_value_error(self):
        assert issubclass(UnsupportedMethodError, ValueError)
