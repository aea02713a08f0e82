#!/usr/bin/env python3
"""
Tests for the path-keyed virtual filesystem.

Covers the seeded layout, read-only queries, and the mutators used when a
session runs with persistent changes.
"""

import pytest

from shelllab.filesystem import FileSystem, FileNode, DirNode, SAMPLE_FILE, seed_paths


@pytest.fixture
def fs():
    """Create a fresh, seeded FileSystem for each test."""
    return FileSystem()


class TestSeed:
    """The fixed layout every session starts from."""

    def test_root_children(self, fs):
        assert fs.listdir('/') == ['home', 'etc', 'var', 'usr']

    def test_home_listing_keeps_order(self, fs):
        assert fs.listdir('/home/user') == ['documents', 'downloads', 'example.txt']

    def test_sample_file(self, fs):
        assert fs.read('/home/user/example.txt') == SAMPLE_FILE
        assert fs.read('/home/user/example.txt').split('\n')[-1] == 'Line 5'

    def test_passwd(self, fs):
        assert fs.read('/etc/passwd').startswith('root:x:0:0:root:/root:/bin/bash\n')

    def test_listed_children_without_entries(self, fs):
        """Some listed names were never given nodes of their own."""
        assert 'hosts' in fs.listdir('/etc')
        assert fs.lookup('/etc/hosts') is None
        assert fs.lookup('/var') is None

    def test_every_key_has_directory_parent(self, fs):
        for path in fs.paths:
            if path == '/':
                continue
            parent = path.rsplit('/', 1)[0] or '/'
            assert fs.is_dir(parent), path
            assert path.rsplit('/', 1)[1] in fs.listdir(parent)

    def test_instances_do_not_share_state(self):
        first = FileSystem()
        second = FileSystem()
        first.mkdir('/tmp')
        assert first.exists('/tmp')
        assert not second.exists('/tmp')
        assert '/tmp' not in seed_paths()


class TestQueries:
    """Lookups never raise."""

    def test_lookup_missing(self, fs):
        assert fs.lookup('/nope') is None
        assert not fs.exists('/nope')

    def test_read_directory_is_none(self, fs):
        assert fs.read('/etc') is None

    def test_listdir_file_is_none(self, fs):
        assert fs.listdir('/etc/passwd') is None

    def test_type_checks(self, fs):
        assert fs.is_dir('/home')
        assert not fs.is_file('/home')
        assert fs.is_file('/etc/passwd')
        assert not fs.is_dir('/missing')

    def test_permissions(self):
        assert DirNode().permissions() == 'drwxr-xr-x'
        assert FileNode('x').permissions() == '-rw-r--r--'


class TestMutation:
    """Mutators keep the parent's child list in sync."""

    def test_mkdir(self, fs):
        assert fs.mkdir('/home/user/projects')
        assert fs.is_dir('/home/user/projects')
        assert fs.listdir('/home/user')[-1] == 'projects'

    def test_mkdir_existing_fails(self, fs):
        assert not fs.mkdir('/etc')

    def test_mkdir_missing_parent_fails(self, fs):
        assert not fs.mkdir('/var/log')
        assert not fs.exists('/var/log')

    @pytest.mark.parametrize('path', [
        '/etc/', '/home/user/.', '/home/user/..', '/home/user//x', 'relative'])
    def test_non_canonical_paths_refused(self, fs, path):
        before = dict(fs.paths)
        assert not fs.mkdir(path)
        assert not fs.write(path, 'data')
        assert fs.paths == before

    def test_copy_onto_dot_entry_refused(self, fs):
        assert not fs.copy('/home/user/example.txt', '/home/user/..')
        assert not fs.exists('/home/user/..')

    def test_mkdir_listed_but_unseeded(self, fs):
        """Creating a listed name does not duplicate it."""
        assert fs.mkdir('/home/user/documents')
        assert fs.listdir('/home/user').count('documents') == 1

    def test_write_and_overwrite(self, fs):
        assert fs.write('/home/user/notes.txt', 'one')
        assert fs.write('/home/user/notes.txt', 'two')
        assert fs.read('/home/user/notes.txt') == 'two'
        assert fs.listdir('/home/user').count('notes.txt') == 1

    def test_write_onto_directory_fails(self, fs):
        assert not fs.write('/etc', 'data')

    def test_remove_file(self, fs):
        assert fs.remove('/etc/passwd')
        assert not fs.exists('/etc/passwd')
        assert 'passwd' not in fs.listdir('/etc')

    def test_remove_subtree(self, fs):
        assert fs.remove('/home')
        assert not fs.exists('/home/user/example.txt')
        assert 'home' not in fs.listdir('/')

    def test_remove_root_refused(self, fs):
        assert not fs.remove('/')
        assert not fs.remove('/missing')

    def test_copy_file(self, fs):
        assert fs.copy('/etc/passwd', '/home/user/passwd.bak')
        assert fs.read('/home/user/passwd.bak') == fs.read('/etc/passwd')
        assert fs.exists('/etc/passwd')

    def test_copy_into_directory(self, fs):
        assert fs.copy('/etc/passwd', '/home/user')
        assert fs.is_file('/home/user/passwd')

    def test_copy_subtree(self, fs):
        assert fs.copy('/home', '/backup')
        assert fs.read('/backup/user/example.txt') == SAMPLE_FILE
        assert 'backup' in fs.listdir('/')

    def test_copy_into_itself_refused(self, fs):
        assert not fs.copy('/home', '/home/user')
        assert not fs.exists('/home/user/home')

    def test_copy_missing_source(self, fs):
        assert not fs.copy('/nope', '/home/user/x')

    def test_move(self, fs):
        assert fs.move('/home/user/example.txt', '/etc')
        assert fs.is_file('/etc/example.txt')
        assert not fs.exists('/home/user/example.txt')
        assert 'example.txt' not in fs.listdir('/home/user')

    def test_move_to_missing_parent_fails(self, fs):
        assert not fs.move('/etc/passwd', '/tmp/passwd')
        assert fs.exists('/etc/passwd')
