"""IR Design — parsed function-pointer declarations."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from . import constants


class CType(BaseModel):
    """A C type as it appears in one declaration slot.

    Pointer depth never exceeds one; a varargs marker (``...``) has no type
    name.
    """

    model_config = ConfigDict(frozen=True)

    type_name: str = ""
    is_ptr: bool = False
    is_const: bool = False
    is_varargs: bool = False

    @property
    def is_void(self) -> bool:
        return not self.is_ptr and self.type_name == constants.VOID

    def __str__(self) -> str:
        if self.is_varargs:
            return constants.ELLIPSIS
        prefix = f"{constants.CONST_KEYWORD} " if self.is_const else ""
        suffix = " *" if self.is_ptr else ""
        return f"{prefix}{self.type_name}{suffix}"


class Param(BaseModel):
    model_config = ConfigDict(frozen=True)

    ctype: CType
    name: str = ""

    @property
    def is_copy_flag(self) -> bool:
        """True for the ``jboolean *isCopy`` out-flag, which has no host consumer."""
        return (
            self.ctype.is_ptr
            and self.ctype.type_name == constants.JBOOLEAN
            and self.name == constants.IS_COPY_PARAM
        )

    def __str__(self) -> str:
        if self.ctype.is_varargs:
            return constants.ELLIPSIS
        return f"{self.ctype} {self.name}"


class Method(BaseModel):
    """One entry of the native method table.

    The first parameter is the dispatch handle by construction of the input.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    ret: CType
    params: tuple[Param, ...] = ()

    @property
    def has_return_value(self) -> bool:
        return not self.ret.is_void

    @property
    def is_varargs(self) -> bool:
        return bool(self.params) and self.params[-1].ctype.is_varargs

    @property
    def has_va_list(self) -> bool:
        return any(p.ctype.type_name == constants.VA_LIST for p in self.params)

    @property
    def is_unsupported(self) -> bool:
        return self.is_varargs or self.has_va_list

    @property
    def is_array_region(self) -> bool:
        return self.name.endswith(constants.ARRAY_REGION_SUFFIX) and self.name.startswith(
            constants.ARRAY_REGION_PREFIXES
        )

    @property
    def is_value_array_call(self) -> bool:
        if not self.params:
            return False
        last = self.params[-1].ctype
        return (
            self.name.startswith(constants.VALUE_ARRAY_CALL_PREFIXES)
            and self.name.endswith(constants.VALUE_ARRAY_CALL_SUFFIX)
            and last.is_ptr
            and last.type_name == constants.JVALUE
        )

    @property
    def handle(self) -> Param:
        return self.params[0]

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.params)
        return f"{self.ret} {self.name}({params})"
