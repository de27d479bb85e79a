import os

import pytest

from javaninja import FINAL, MERGED, REPACKAGED, TRANSLATED, UNCOMPILED, Generator, JarSpec, ModuleContext, TranslateToggles
from javaninja._impl.javasrcs import aidl_flags

from javaninja_testing import STUBS, STUBS_FILES, generate, load, out, source_tree, statements


def _device(files, modules):
    files = dict(files)
    files.update(STUBS_FILES)
    modules = dict(modules)
    modules.update(STUBS)
    return files, modules


def test_merge_order():
    with source_tree({'A.java': '', 'B.java': ''}) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library_host', 'srcs': ['A.java'], 'java_static_libs': ['B']},
            'B': {'type': 'java_library_host', 'srcs': ['B.java']},
        })
        contexts = generate(definition)
        ctx = contexts['A[host]']
        assert [s.rule for s in ctx.statements] == ['javac', 'jar', 'install']
        jar = statements(ctx, 'jar')[0]
        assert jar.outputs == [out(tmp, 'host', 'A', 'classes-full-debug.jar')]
        assert jar.variables['jarArgs'].split() == [
            '-C', out(tmp, 'host', 'A', 'classes'), '-l', out(tmp, 'host', 'A', 'classes.list'),
            '-C', out(tmp, 'host', 'B', 'classes'), '-l', out(tmp, 'host', 'B', 'classes.list'),
        ]
        javac = statements(ctx, 'javac')[0]
        assert javac.inputs == [os.path.join(tmp, 'A.java')]
        assert javac.variables['classpath'] == '-classpath ' + out(tmp, 'host', 'B', 'classes-full-debug.jar')
        assert out(tmp, 'host', 'B', 'classes-full-debug.jar') in javac.implicit

        a = definition.dependency('A', 'host')
        assert a.output_states == [UNCOMPILED, MERGED, FINAL]
        assert a.classpath_file() == out(tmp, 'host', 'A', 'classes-full-debug.jar')
        # a static library is exported together with the own classes
        assert a.class_jar_specs() == [
            JarSpec.directory(out(tmp, 'host', 'A', 'classes'), out(tmp, 'host', 'A', 'classes.list')),
            JarSpec.directory(out(tmp, 'host', 'B', 'classes'), out(tmp, 'host', 'B', 'classes.list')),
        ]
        install = statements(ctx, 'install')[0]
        assert install.outputs == [os.path.join(tmp, 'out', 'install', 'host', 'framework', 'A.jar')]
        assert install.inputs == [a.classpath_file()]


def test_empty_module():
    files, modules = _device({}, {'A': {'type': 'java_library', 'sdk_version': 'current'}})
    with source_tree(files) as tmp:
        definition = load(tmp, modules)
        ctx = generate(definition)['A[device]']
        assert not ctx.failed()
        assert statements(ctx, 'javac') == []
        assert statements(ctx, 'dx') == []
        assert [s.rule for s in ctx.statements] == ['jar', 'install']
        a = definition.dependency('A', 'device')
        assert a.output_states == [UNCOMPILED, MERGED, FINAL]
        assert a.output_file() == a.classpath_file()


def test_static_library_only_is_not_translated():
    files, modules = _device({'B.java': ''}, {
        'A': {'type': 'java_library', 'sdk_version': 'current', 'java_static_libs': ['B']},
        'B': {'type': 'java_library', 'sdk_version': 'current', 'srcs': ['B.java']},
    })
    with source_tree(files) as tmp:
        definition = load(tmp, modules)
        contexts = generate(definition)
        assert statements(contexts['A[device]'], 'dx') == []
        assert len(statements(contexts['B[device]'], 'dx')) == 1


def test_translation_includes_resources():
    files, modules = _device({'A.java': '', 'B.java': '', 'res/a.txt': 'a', 'bres/b/b.txt': 'b'}, {
        'A': {'type': 'java_library', 'sdk_version': 'current', 'srcs': ['A.java'], 'java_resource_dirs': ['res'], 'java_static_libs': ['B']},
        'B': {'type': 'java_library', 'sdk_version': 'current', 'srcs': ['B.java'], 'java_resource_dirs': ['bres']},
    })
    with source_tree(files) as tmp:
        definition = load(tmp, modules)
        ctx = generate(definition)['A[device]']
        assert [s.rule for s in ctx.statements] == ['javac', 'jar', 'dx', 'jar', 'install']

        a_res_list = out(tmp, 'device', 'A', 'res', 'res', 'resources.list')
        b_res_list = out(tmp, 'device', 'B', 'res', 'bres', 'resources.list')
        assert ctx.generated_files[a_res_list] == 'a.txt\n'

        merged, final = statements(ctx, 'jar')
        assert merged.variables['jarArgs'].split() == [
            '-C', out(tmp, 'device', 'A', 'classes'), '-l', out(tmp, 'device', 'A', 'classes.list'),
            '-C', out(tmp, 'device', 'B', 'classes'), '-l', out(tmp, 'device', 'B', 'classes.list'),
            '-C', os.path.join(tmp, 'res'), '-l', a_res_list,
            '-C', os.path.join(tmp, 'bres'), '-l', b_res_list,
        ]
        assert final.outputs == [out(tmp, 'device', 'A', 'javalib.jar')]
        assert final.variables['jarArgs'].split() == [
            '-C', os.path.join(tmp, 'res'), '-l', a_res_list,
            '-C', os.path.join(tmp, 'bres'), '-l', b_res_list,
            '-C', out(tmp, 'device', 'A', 'dex'), '-l', out(tmp, 'device', 'A', 'dex.list'),
        ]
        dx = statements(ctx, 'dx')[0]
        assert dx.inputs == [out(tmp, 'device', 'A', 'classes-full-debug.jar')]

        a = definition.dependency('A', 'device')
        assert a.output_states == [UNCOMPILED, MERGED, TRANSLATED, FINAL]
        assert a.output_file() == out(tmp, 'device', 'A', 'javalib.jar')
        # dependents compile against the classes, not against the dex archive
        assert a.classpath_file() == out(tmp, 'device', 'A', 'classes-full-debug.jar')
        assert ctx.checkbuild_files == [a.output_file()]


def test_repackage():
    with source_tree({'A.java': '', 'res/a.txt': '', 'rules.txt': 'rule a.** b.@1'}) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library_host', 'srcs': ['A.java'], 'java_resource_dirs': ['res'], 'jarjar_rules': 'rules.txt'},
        })
        ctx = generate(definition)['A[host]']
        assert [s.rule for s in ctx.statements] == ['javac', 'jar', 'jarjar', 'extract', 'install']
        jarjar = statements(ctx, 'jarjar')[0]
        assert jarjar.inputs == [out(tmp, 'host', 'A', 'classes-full-debug.jar')]
        assert jarjar.variables['rulesFile'] == os.path.join(tmp, 'rules.txt')

        a = definition.dependency('A', 'host')
        assert a.output_states == [UNCOMPILED, MERGED, REPACKAGED, FINAL]
        assert a.classpath_file() == out(tmp, 'host', 'A', 'classes-jarjar.jar')
        assert a.class_jar_specs() == [JarSpec.directory(out(tmp, 'host', 'A', 'jarjar'), out(tmp, 'host', 'A', 'jarjar.classes.list'))]
        assert a.resource_jar_specs() == [JarSpec.directory(os.path.join(tmp, 'res'), out(tmp, 'host', 'A', 'res', 'res', 'resources.list'))]


def test_prebuilt():
    with source_tree({'A.java': '', 'lib.jar': ''}) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library_host', 'srcs': ['A.java'], 'java_static_libs': ['lib']},
            'lib': {'type': 'prebuilt_java_library', 'srcs': ['lib.jar'], 'host_supported': True},
        })
        contexts = generate(definition)
        ctx = contexts['lib[host]']
        extract = statements(ctx, 'extract')[0]
        assert extract.inputs == [os.path.join(tmp, 'lib.jar')]
        assert extract.outputs == [out(tmp, 'host', 'lib', 'extracted.classes.list')]
        assert extract.implicit_outputs == [out(tmp, 'host', 'lib', 'extracted.resources.list')]

        lib = definition.dependency('lib', 'host')
        assert lib.classpath_file() == os.path.join(tmp, 'lib.jar')
        jar = statements(contexts['A[host]'], 'jar')[0]
        assert jar.variables['jarArgs'].split()[4:] == [
            '-C', out(tmp, 'host', 'lib', 'extracted'), '-l', out(tmp, 'host', 'lib', 'extracted.classes.list'),
            '-C', out(tmp, 'host', 'lib', 'extracted'), '-l', out(tmp, 'host', 'lib', 'extracted.resources.list'),
        ]


def test_prebuilt_with_two_archives():
    with source_tree({'A.java': '', 'one.jar': '', 'two.jar': ''}) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library_host', 'srcs': ['A.java'], 'java_libs': ['lib']},
            'lib': {'type': 'prebuilt_java_library', 'srcs': ['one.jar', 'two.jar'], 'host_supported': True},
        })
        generator = Generator(definition)
        contexts = {str(ctx.module): ctx for ctx in generator.generate()}
        assert [e.message for e in contexts['lib[host]'].errors] == ['expected exactly one archive in sources']
        assert [e.message for e in contexts['A[host]'].errors] == ["dependency 'lib' has errors"]
        assert contexts['A[host]'].statements == []
        with pytest.raises(SystemExit) as e:
            generator.check_errors()
        assert e.value.code == 1


def test_missing_source():
    with source_tree({}) as tmp:
        definition = load(tmp, {'A': {'type': 'java_library_host', 'srcs': ['Missing.java']}})
        ctx = generate(definition)['A[host]']
        assert ctx.failed()
        assert 'Missing.java' in ctx.errors[0].message
        assert ctx.statements == []


def test_source_patterns():
    with source_tree({'src/a/A.java': '', 'src/b/B.java': '', 'src/b/BTest.java': '', 'src/c/C.java': ''}) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library_host', 'srcs': ['src/b/**/*.java', 'src/a/*.java'], 'exclude_srcs': ['src/b/BTest.java']},
        })
        javac = statements(generate(definition)['A[host]'], 'javac')[0]
        assert javac.inputs == [os.path.join(tmp, 'src', 'b', 'B.java'), os.path.join(tmp, 'src', 'a', 'A.java')]


def test_generated_sources():
    with source_tree({'A.java': '', 'gen.txt': ''}) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library_host', 'srcs': ['A.java', ':gen']},
            'gen': {'type': 'genrule', 'srcs': ['gen.txt'], 'out': ['Gen.java'], 'cmd': 'generate $(in) > $(out)'},
        })
        contexts = generate(definition)
        gen_out = out(tmp, 'host', 'gen', 'gen', 'Gen.java')
        genrule = statements(contexts['gen[host]'], 'genrule')[0]
        assert genrule.outputs == [gen_out]
        assert genrule.variables['cmd'] == f"generate {os.path.join(tmp, 'gen.txt')} > {gen_out}"
        javac = statements(contexts['A[host]'], 'javac')[0]
        assert javac.inputs == [os.path.join(tmp, 'A.java'), gen_out]


def test_aidl_and_logtags():
    with source_tree({'A.java': '', 'IFoo.aidl': '', 'events.logtags': '', 'include/x.aidl': ''}) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library_host', 'srcs': ['*.java', '*.aidl', '*.logtags'], 'aidl_includes': ['include']},
        })
        generator = Generator(definition)
        ctx = generator.generate()[0]
        aidl = statements(ctx, 'aidl')[0]
        assert aidl.outputs == [out(tmp, 'host', 'A', 'aidl', 'IFoo.java')]
        assert aidl.variables['aidlFlags'].split() == ['-I' + os.path.join(tmp, 'include'), '-I' + tmp, '-I' + os.path.join(tmp, 'src')]
        logtags = statements(ctx, 'logtags')[0]
        assert logtags.outputs == [out(tmp, 'host', 'A', 'logtags', 'events.java')]
        javac = statements(ctx, 'javac')[0]
        assert javac.inputs == [os.path.join(tmp, 'A.java'), aidl.outputs[0], logtags.outputs[0]]

        assert [s.rule for s in generator.singletons] == ['merge_logtags']
        assert generator.singletons[0].inputs == [os.path.join(tmp, 'events.logtags')]
        assert generator.singletons[0].outputs == [os.path.join(tmp, 'out', 'event-log-tags')]


def test_aidl_flags():
    with source_tree({'A.java': ''}) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library_host', 'srcs': ['A.java'], 'aidl_includes': ['local'], 'export_aidl_include_dirs': ['exported']},
        })
        a = definition.dependency('A', 'host')
        ctx = ModuleContext(a, definition.config)
        assert aidl_flags(ctx, a, None, ['/inherited']) == [
            '-I/inherited',
            '-I' + os.path.join(tmp, 'exported'),
            '-I' + os.path.join(tmp, 'local'),
            '-I' + tmp,
            '-I' + os.path.join(tmp, 'src'),
        ]
        # a preprocessed file replaces the inherited include dirs
        assert aidl_flags(ctx, a, '/sdk/framework.aidl', ['/inherited'])[:2] == ['-p/sdk/framework.aidl', '-I' + os.path.join(tmp, 'exported')]


def test_translate_flags():
    with source_tree({}) as tmp:
        definition = load(tmp, {'A': {'type': 'java_library', 'no_standard_libraries': True, 'dxflags': ['--multi-dex']}})
        a = definition.dependency('A', 'device')
        config = definition.config.with_overrides(toggles=TranslateToggles())
        assert a.translate_flags(ModuleContext(a, config)) == ['--multi-dex']
        config = definition.config.with_overrides(toggles=TranslateToggles(no_optimize=True, debug_dump=True, instrument=True))
        assert a.translate_flags(ModuleContext(a, config)) == [
            '--multi-dex', '--no-locals', '--no-optimize',
            '--debug', '--verbose', '--dump-to=' + out(tmp, 'device', 'A', 'classes.lst'), '--dump-width=1000',
        ]


def test_binary():
    with source_tree({'A.java': '', 'a.sh': ''}) as tmp:
        definition = load(tmp, {'A': {'type': 'java_binary_host', 'srcs': ['A.java'], 'wrapper': 'a.sh'}})
        ctx = generate(definition)['A[host]']
        jar_install, wrapper_install = statements(ctx, 'install')
        install_root = os.path.join(tmp, 'out', 'install', 'host')
        assert jar_install.outputs == [os.path.join(install_root, 'framework', 'A.jar')]
        assert wrapper_install.outputs == [os.path.join(install_root, 'bin', 'a.sh')]
        assert wrapper_install.inputs == [os.path.join(tmp, 'a.sh')]
        assert wrapper_install.implicit == jar_install.outputs


def test_binary_without_wrapper():
    with source_tree({'A.java': ''}) as tmp:
        definition = load(tmp, {'A': {'type': 'java_binary_host', 'srcs': ['A.java']}})
        ctx = generate(definition)['A[host]']
        assert ctx.failed()


def test_resource_bundle():
    files, modules = _device({'A.java': '', 'app/AndroidManifest.xml': '', 'app/res/values/strings.xml': ''}, {
        'A': {'type': 'java_library', 'sdk_version': 'current', 'srcs': ['A.java'], 'srclist_libs': ['app-res']},
        'app-res': {'type': 'resource_bundle', 'dir': 'app'},
    })
    with source_tree(files) as tmp:
        definition = load(tmp, modules)
        contexts = generate(definition)
        src_list = out(tmp, 'device', 'app-res', 'R.java.list')
        aapt = statements(contexts['app-res[device]'], 'aapt')[0]
        assert aapt.outputs == [src_list]
        assert aapt.implicit == [os.path.join(tmp, 'app', 'res', 'values', 'strings.xml')]
        javac = statements(contexts['A[device]'], 'javac')[0]
        assert javac.variables['srcFileLists'] == '@' + src_list
        assert src_list in javac.implicit


def test_manifest():
    with source_tree({'A.java': '', 'META-INF/MANIFEST.MF': 'Manifest-Version: 1.0\n'}) as tmp:
        definition = load(tmp, {'A': {'type': 'java_library_host', 'srcs': ['A.java'], 'manifest': 'META-INF/MANIFEST.MF'}})
        jar = statements(generate(definition)['A[host]'], 'jar')[0]
        manifest = os.path.join(tmp, 'META-INF', 'MANIFEST.MF')
        assert jar.variables['jarArgs'].split()[:4] == ['-m', manifest, '-C', out(tmp, 'host', 'A', 'classes')]
        assert manifest in jar.implicit


def test_missing_manifest():
    with source_tree({'A.java': ''}) as tmp:
        definition = load(tmp, {'A': {'type': 'java_library_host', 'srcs': ['A.java'], 'manifest': 'MANIFEST.MF'}})
        ctx = generate(definition)['A[host]']
        assert ctx.failed()
        assert os.path.join(tmp, 'MANIFEST.MF') in ctx.errors[0].message
        assert statements(ctx, 'jar') == []
        assert definition.dependency('A', 'host').output_states == [UNCOMPILED]


@pytest.mark.parametrize('resource_dirs', [['res', 'res/'], ['res/*', 'res/a']])
def test_resource_dir_named_twice(resource_dirs):
    with source_tree({'res/a/r.txt': ''}) as tmp:
        definition = load(tmp, {'A': {'type': 'java_library_host', 'java_resource_dirs': resource_dirs}})
        ctx = generate(definition)['A[host]']
        assert not ctx.failed()
        jar_args = statements(ctx, 'jar')[0].variables['jarArgs'].split()
        # each directory is merged once
        assert len(jar_args) == 4
        assert len(ctx.generated_files) == 1


def test_sources_outside_module_directory():
    with source_tree({'A/A.java': '', 'x/IFoo.aidl': '', 'y/IFoo.aidl': ''}) as tmp:
        definition = load(tmp, {
            'A': {'type': 'java_library_host', 'dir': 'A', 'srcs': ['A.java', '../x/IFoo.aidl', '../y/IFoo.aidl']},
        })
        aidl = statements(generate(definition)['A[host]'], 'aidl')
        assert [s.outputs for s in aidl] == [
            [out(tmp, 'host', 'A', 'aidl', '__', 'x', 'IFoo.java')],
            [out(tmp, 'host', 'A', 'aidl', '__', 'y', 'IFoo.java')],
        ]
