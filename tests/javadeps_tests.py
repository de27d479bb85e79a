import os

import pytest

from javaninja import DependencyClassificationError, ModuleContext, classify
from javaninja._impl.javadeps import BOOT_CLASSPATH, DEFAULT_LIBRARY, SHARED_LIBRARY, STATIC_LIBRARY, dependency_category

from javaninja_testing import STUBS, STUBS_FILES, generate, load, out, source_tree


def _classify(definition, name, variant='host'):
    m = definition.dependency(name, variant)
    return classify(ModuleContext(m, definition.config), m)


def test_static_library():
    with source_tree({'A.java': '', 'B.java': ''}) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library_host', 'srcs': ['A.java'], 'java_static_libs': ['B']},
            'B': {'type': 'java_library_host', 'srcs': ['B.java']},
        })
        generate(definition)
        deps = _classify(definition, 'A')
        b_jar = out(tmp, 'host', 'B', 'classes-full-debug.jar')
        assert deps.classpath == [b_jar]
        assert deps.boot_classpath is None
        assert deps.class_jar_specs == list(definition.dependency('B', 'host').class_jar_specs())
        assert deps.resource_jar_specs == []
        assert deps.aidl_preprocessed is None


def test_classification_is_idempotent():
    with source_tree({'A.java': '', 'B.java': '', 'C.java': ''}) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library_host', 'srcs': ['A.java'], 'java_libs': ['C'], 'java_static_libs': ['B']},
            'B': {'type': 'java_library_host', 'srcs': ['B.java']},
            'C': {'type': 'java_library_host', 'srcs': ['C.java']},
        })
        generate(definition)
        first = _classify(definition, 'A')
        second = _classify(definition, 'A')
        assert vars(first) == vars(second)
        # shared libraries precede static libraries in the traversal order
        assert first.classpath == [out(tmp, 'host', 'C', 'classes-full-debug.jar'), out(tmp, 'host', 'B', 'classes-full-debug.jar')]


def test_categories():
    files = {'A.java': '', 'B.java': '', 'sdk/core.jar': '', 'sdk/framework.jar': ''}
    with source_tree(files) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library', 'srcs': ['A.java'], 'java_static_libs': ['B']},
            'B': {'type': 'java_library', 'srcs': ['B.java']},
            'core-libart': {'type': 'prebuilt_java_library', 'srcs': ['sdk/core.jar']},
            'framework': {'type': 'prebuilt_java_library', 'srcs': ['sdk/framework.jar']},
        }, config={'sdk': {'default_libraries': ['core-libart', 'framework']}})
        a = definition.dependency('A', 'device')
        assert a.dependency_names() == ['core-libart', 'core-libart', 'framework', 'B']
        assert [d.name for d in a.deps] == ['core-libart', 'framework', 'B']
        assert [dependency_category(a, d) for d in a.deps] == [BOOT_CLASSPATH, DEFAULT_LIBRARY, STATIC_LIBRARY]

        generate(definition)
        deps = _classify(definition, 'A', 'device')
        assert deps.boot_classpath == os.path.join(tmp, 'sdk', 'core.jar')
        assert deps.classpath[0].endswith('framework.jar')
        assert deps.classpath[1] == out(tmp, 'device', 'B', 'classes-full-debug.jar')


def test_system_current():
    files = {'A.java': '', 'sdk/system.jar': ''}
    with source_tree(files) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library', 'srcs': ['A.java'], 'sdk_version': 'system_current'},
            'android_system_stubs_current': {'type': 'prebuilt_sdk', 'srcs': ['sdk/system.jar']},
        })
        a = definition.dependency('A', 'device')
        assert a.boot_classpath() == 'android_system_stubs_current'
        assert not a.uses_default_libraries()
        assert a.dependency_names() == ['android_system_stubs_current']

        contexts = generate(definition)
        deps = _classify(definition, 'A', 'device')
        assert deps.boot_classpath.endswith('system.jar')
        assert deps.classpath == []
        javac = [s for s in contexts['A[device]'].statements if s.rule == 'javac']
        assert javac[0].variables['bootClasspath'] == '-bootclasspath ' + deps.boot_classpath


def test_versioned_sdk():
    with source_tree({'A.java': '', 'sdk/v21.jar': ''}) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library', 'srcs': ['A.java'], 'sdk_version': '21'},
            'sdk_v21': {'type': 'prebuilt_sdk', 'srcs': ['sdk/v21.jar']},
        })
        assert definition.dependency('A', 'device').boot_classpath() == 'sdk_v21'


def test_host_boot_classpath():
    with source_tree({'A.java': '', 'B.java': '', 'sdk/core.jar': ''}) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library', 'srcs': ['A.java'], 'host_supported': True, 'device_supported': False},
            'B': {'type': 'java_library_host', 'srcs': ['B.java']},
            'core-libart': {'type': 'prebuilt_java_library', 'srcs': ['sdk/core.jar'], 'host_supported': True},
        })
        # dexed host modules compile against the default boot library
        assert definition.dependency('A', 'host').boot_classpath() == 'core-libart'
        assert definition.dependency('B', 'host').boot_classpath() == ''
        assert definition.dependency('A', 'device', fatalIfMissing=False) is None


def test_no_standard_libraries():
    with source_tree({'A.java': ''}) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library', 'srcs': ['A.java'], 'no_standard_libraries': True},
        })
        a = definition.dependency('A', 'device')
        assert a.boot_classpath() == ''
        assert a.dependency_names() == []


def test_unknown_dependency():
    with source_tree({'A.java': '', 'B.java': '', 'C.java': ''}) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library_host', 'srcs': ['A.java'], 'java_libs': ['B']},
            'B': {'type': 'java_library_host', 'srcs': ['B.java']},
            'C': {'type': 'java_library_host', 'srcs': ['C.java']},
        })
        generate(definition)
        a = definition.dependency('A', 'host')
        c = definition.dependency('C', 'host')
        with pytest.raises(DependencyClassificationError) as e:
            classify(ModuleContext(a, definition.config), a, a.deps + [c])
        assert e.value.module_name == 'A'
        assert e.value.dependency_name == 'C'
        assert "'C'" in str(e.value) and "'A'" in str(e.value)


def test_multiple_preprocessed_aidls():
    files = {'A.java': '', 'one.jar': '', 'two.jar': '', 'one.aidl': '', 'two.aidl': ''}
    files.update(STUBS_FILES)
    modules = {
        'A': {'type': 'java_library', 'srcs': ['A.java'], 'sdk_version': 'current', 'java_libs': ['one', 'two']},
        'one': {'type': 'prebuilt_sdk', 'srcs': ['one.jar'], 'aidl_preprocessed': 'one.aidl'},
        'two': {'type': 'prebuilt_sdk', 'srcs': ['two.jar'], 'aidl_preprocessed': 'two.aidl'},
    }
    modules.update(STUBS)
    with source_tree(files) as tmp:
        definition = load(tmp, modules)
        contexts = generate(definition)
        ctx = contexts['A[device]']
        assert ctx.failed()
        assert ctx.errors[0].message.startswith('multiple dependencies with preprocessed aidls')
        assert [s for s in ctx.statements if s.rule == 'javac'] == []
        assert definition.dependency('A', 'device').failed


def test_shared_library_category():
    with source_tree({'A.java': '', 'B.java': ''}) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library_host', 'srcs': ['A.java'], 'java_libs': ['B']},
            'B': {'type': 'java_library_host', 'srcs': ['B.java']},
        })
        a = definition.dependency('A', 'host')
        assert dependency_category(a, a.deps[0]) == SHARED_LIBRARY
        generate(definition)
        deps = _classify(definition, 'A')
        # shared libraries contribute no JarSpecs
        assert deps.class_jar_specs == []
        assert deps.resource_jar_specs == []
