"""Tests for generation statistics: count_classifications (pure) and method_stats (API wrapper)."""

from jnigen.api import method_stats
from jnigen.gen_types import GenerationStats
from jnigen.header import load_declarations
from jnigen.parser import parse_declarations
from jnigen.policy import DEFAULT_POLICY, PolicyTables
from jnigen.stats import count_classifications

SOURCE = """\
jint (JNICALL *GetVersion)(JNIEnv *env);
jint (JNICALL *CallIntMethod)(JNIEnv *env, jobject obj, jmethodID methodID, ...);
jint (JNICALL *CallIntMethodA)(JNIEnv *env, jobject obj, jmethodID methodID, const jvalue *args);
void (JNICALL *GetIntArrayRegion)(JNIEnv *env, jintArray array, jsize start, jsize l, jint *buf);
jobject (JNICALL *NewDirectByteBuffer)(JNIEnv *env, void *address, jlong capacity);
"""


class TestCountClassifications:
    def test_empty(self):
        assert count_classifications([], DEFAULT_POLICY) == {
            "total": 0,
            "unsupported": 0,
            "array_region": 0,
            "value_array_call": 0,
            "c_emitted": 0,
            "host_emitted": 0,
        }

    def test_mixed_methods(self):
        methods = parse_declarations(SOURCE).methods
        assert count_classifications(methods, DEFAULT_POLICY) == {
            "total": 5,
            "unsupported": 1,
            "array_region": 1,
            "value_array_call": 1,
            "c_emitted": 4,
            "host_emitted": 3,
        }

    def test_policy_changes_emission_counts(self):
        methods = parse_declarations(SOURCE).methods
        counts = count_classifications(methods, PolicyTables())
        assert counts["c_emitted"] == 4
        assert counts["host_emitted"] == 4

    def test_bundled_table(self):
        methods = parse_declarations(load_declarations()).methods
        assert count_classifications(methods, DEFAULT_POLICY) == {
            "total": 228,
            "unsupported": 62,
            "array_region": 16,
            "value_array_call": 31,
            "c_emitted": 138,
            "host_emitted": 132,
        }


class TestMethodStats:
    def test_returns_generation_stats(self):
        stats = method_stats(SOURCE)
        assert isinstance(stats, GenerationStats)
        assert stats.counts["total"] == 5
        assert stats.diagnostics == 0

    def test_counts_parse_diagnostics(self):
        stats = method_stats(SOURCE + "jint (JNICALL *GetJavaVM)(JNIEnv *env, JavaVM **vm);")
        assert stats.diagnostics == 1

    def test_report(self):
        report = method_stats(SOURCE).report()
        assert report.startswith("═══ Generation Statistics ═══")
        assert "host_emitted" in report
        assert "diagnostics" in report
