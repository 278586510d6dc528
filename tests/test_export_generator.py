import logging

import pytest

from jniexport import (
    DescriptorError, ExportGenerator, ExportRequest, NativeParam, UsageError,
    build_export, generate_export, parse_method, symbol_name,
)


def _request(name="testMethod1", sig="(I)I", target="test_method_1", cls="com/example/Test"):
    return ExportRequest(cls, name, sig, target)


def test_generate_export_shape():
    sig = parse_method("(ILjava/lang/String;[I)J")
    symbol = symbol_name("pkg/Cls", "f", sig.args_descriptor())
    stub = generate_export("pkg.Cls.f", sig, symbol, "f_impl")

    assert stub.symbol == "Java_pkg_Cls_f__ILjava_lang_String_2_3I"
    assert stub.params == (
        NativeParam("JNIEnv*", "env"),
        NativeParam("jclass", "cls"),
        NativeParam("jint", "arg0"),
        NativeParam("jstring", "arg1"),
        NativeParam("jarray", "arg2"),
    )
    assert stub.return_type == "jlong"
    assert stub.target == "f_impl"


@pytest.mark.parametrize("descriptor", [
    "()", "()I", "(I)", "(ZBCSIJFD)D", "([[Ljava/lang/Object;Ljava/lang/String;)V",
])
def test_stub_params_and_return_follow_signature(descriptor):
    sig = parse_method(descriptor)
    stub = generate_export("a.B.c", sig, "sym", "impl")
    assert len(stub.params) == 2 + len(sig.args)
    assert (stub.return_type is None) == (sig.ret is None)
    assert [p.name for p in stub.params[2:]] == [f"arg{i}" for i in range(len(sig.args))]


def test_void_return():
    stub = build_export(_request(sig="(Z)V", target="impl"))
    assert stub.return_type is None
    assert stub.native_return == "void"


def test_build_export_uses_long_symbol():
    stub = build_export(_request(name="reset", sig="()", target="reset_impl"))
    assert stub.symbol == "Java_com_example_Test_reset__"
    assert stub.qualified_name == "com.example.Test.reset"


def test_build_export_propagates_descriptor_error():
    with pytest.raises(DescriptorError):
        build_export(_request(sig="(I)Itrailing"))


def test_injected_logger_receives_debug(caplog):
    log = logging.getLogger("test.exports")
    with caplog.at_level(logging.DEBUG, logger="test.exports"):
        build_export(_request(), log)
    assert any("Java_com_example_Test_testMethod1__I" in r.getMessage() for r in caplog.records)


def test_generate_all_isolates_failures():
    generator = ExportGenerator("example")
    requests = [
        _request(name="a", sig="(I)I", target="a_impl"),
        _request(name="b", sig="(I", target="b_impl"),
        _request(name="c", sig="()V", target="c_impl"),
    ]
    stubs, failures = generator.generate_all(requests)
    assert [s.target for s in stubs] == ["a_impl", "c_impl"]
    assert len(failures) == 1
    assert failures[0][0].method_name == "b"
    assert isinstance(failures[0][1], DescriptorError)


def test_generate_all_rejects_duplicate_symbol():
    generator = ExportGenerator("example")
    stubs, failures = generator.generate_all([
        _request(target="first"),
        _request(target="second"),
    ])
    assert [s.target for s in stubs] == ["first"]
    assert isinstance(failures[0][1], UsageError)


def test_overloads_are_not_duplicates():
    generator = ExportGenerator("example")
    stubs, failures = generator.generate_all([
        _request(name="describe", sig="([I)V", target="describe_ints"),
        _request(name="describe", sig="([[D)V", target="describe_matrix"),
    ])
    assert len(stubs) == 2
    assert failures == []


def test_generate_header():
    generator = ExportGenerator("example")
    stub = generator.export(_request())
    header = generator.generate_header([stub])

    assert "#ifndef EXAMPLE_EXPORTS_H" in header
    assert "#include <jni.h>" in header
    assert "/* com.example.Test.testMethod1 (I)I */" in header
    assert ("JNIEXPORT jint JNICALL Java_com_example_Test_testMethod1__I"
            "(JNIEnv* env, jclass cls, jint arg0);") in header


def test_generate_impl_forwards_arguments():
    generator = ExportGenerator("example")
    stubs = [
        generator.export(_request()),
        generator.export(_request(name="reset", sig="()V", target="test_reset")),
    ]
    impl = generator.generate_impl(stubs, "example_exports.h")
    lines = impl.splitlines()

    assert '#include "example_exports.h"' in lines
    assert "extern jint test_method_1(JNIEnv* env, jclass cls, jint arg0);" in lines
    assert "extern void test_reset(JNIEnv* env, jclass cls);" in lines
    assert "    return test_method_1(env, cls, arg0);" in lines
    assert "    test_reset(env, cls);" in lines
    assert ("JNIEXPORT void JNICALL Java_com_example_Test_reset__(JNIEnv* env, jclass cls) {"
            in lines)


def test_generate_impl_declares_shared_target_once():
    generator = ExportGenerator("example")
    stubs = [
        generator.export(_request(name="a", target="shared")),
        generator.export(_request(name="b", target="shared")),
    ]
    impl = generator.generate_impl(stubs, "example_exports.h")
    assert impl.count("extern jint shared(") == 1
    assert impl.count("return shared(env, cls, arg0);") == 2


def test_export_rejects_symbol_already_exported():
    generator = ExportGenerator("example")
    generator.export(_request(target="first"))
    with pytest.raises(UsageError, match="already exported by com.example.Test.testMethod1") as exc_info:
        generator.export(_request(target="second"))
    assert exc_info.value.field == "name"


def test_generate_all_logs_each_export_once(caplog):
    generator = ExportGenerator("example", logger=logging.getLogger("test.batch"))
    with caplog.at_level(logging.INFO, logger="test.batch"):
        stubs, _ = generator.generate_all([
            _request(name="a", target="a_impl"),
            _request(name="b", target="b_impl"),
        ])
    exported = [r for r in caplog.records if r.getMessage().startswith("Exported")]
    assert [r.getMessage() for r in exported] == [
        f"Exported com.example.Test.a as {stubs[0].symbol}",
        f"Exported com.example.Test.b as {stubs[1].symbol}",
    ]
