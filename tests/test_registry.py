"""
Tests registration of tests and groups into pytest-collectable namespaces
"""

import unittest
import pytest

from sqlscenario.registry import (GroupRegistrar, TestRegistrar, caller_path, collect_into,
                                  register_group, register_test)


class RegisterTestTest(unittest.TestCase):

    def test_function_in_namespace(self):
        calls = []
        namespace = {'__name__': 'my_tests'}

        with collect_into(namespace):
            test = register_test("Creates an account!", lambda: calls.append(1))

        self.assertIs(namespace['test_creates_an_account'], test)
        self.assertEqual(test.__name__, 'test_creates_an_account')
        self.assertEqual(test.__module__, 'my_tests')
        self.assertEqual(test.__doc__, "Creates an account!")

        self.assertIsNone(test())
        self.assertEqual(calls, [1])

    def test_duplicate_names(self):
        namespace = {}

        with collect_into(namespace):
            register_test("same", lambda: None)
            register_test("same", lambda: None)
            register_test("same", lambda: None)

        self.assertEqual(sorted(namespace), ['test_same', 'test_same_2', 'test_same_3'])

    def test_result_is_not_returned(self):
        """pytest warns about tests returning values"""
        namespace = {}
        with collect_into(namespace):
            test = register_test("returns", lambda: 42)

        self.assertIsNone(test())

    def test_marks(self):
        namespace = {}
        with collect_into(namespace):
            skipped = register_test.skip("skipped", lambda: None)
            failing = register_test.failing("failing", lambda: None)
            only = register_test.only("only", lambda: None)

        self.assertEqual([m.name for m in skipped.pytestmark], ['skip'])
        self.assertEqual([m.name for m in failing.pytestmark], ['xfail'])
        self.assertTrue(failing.pytestmark[0].kwargs['strict'])
        self.assertEqual([m.name for m in only.pytestmark], ['only'])

    def test_plain_has_no_marks(self):
        namespace = {}
        with collect_into(namespace):
            test = register_test("plain", lambda: None)

        self.assertFalse(hasattr(test, 'pytestmark'))

    def test_not_collected_itself(self):
        self.assertFalse(TestRegistrar.__test__)


class RegisterGroupTest(unittest.TestCase):

    def test_group_class(self):
        namespace = {'__name__': 'my_tests'}
        events = []

        def body():
            register_group.before_all(lambda: events.append('before'))
            register_group.after_all(lambda: events.append('after'))
            register_test("first", lambda: events.append('first'))

        with collect_into(namespace):
            cls = register_group("account tests", body)

        self.assertIs(namespace['TestAccountTests'], cls)
        self.assertEqual(cls.__doc__, "account tests")
        self.assertEqual(cls.__module__, 'my_tests')
        self.assertIn('test_first', vars(cls))
        self.assertEqual(cls.test_first.__qualname__, 'TestAccountTests.test_first')

        # the way pytest drives a class
        cls.setup_class()
        cls().test_first()
        cls.teardown_class()

        self.assertEqual(events, ['before', 'first', 'after'])

    def test_nested_groups(self):
        namespace = {}
        events = []

        def inner():
            register_group.before_all(lambda: events.append('inner before'))
            register_test("deep", lambda: None)

        def outer():
            register_group.before_all(lambda: events.append('outer before'))
            register_group("inner", inner)

        with collect_into(namespace):
            register_group("outer", outer)

        outer_cls = namespace['TestOuter']
        self.assertIn('TestInner', vars(outer_cls))
        self.assertIn('test_deep', vars(outer_cls.TestInner))
        self.assertNotIn('test_deep', vars(outer_cls))

        outer_cls.setup_class()
        self.assertEqual(events, ['outer before'])
        outer_cls.TestInner.setup_class()
        self.assertEqual(events, ['outer before', 'inner before'])

    def test_hooks_in_order(self):
        namespace = {}
        events = []

        def body():
            register_group.after_all(lambda: events.append(1))
            register_group.after_all(lambda: events.append(2))

        with collect_into(namespace):
            cls = register_group("ordered", body)

        cls.teardown_class()
        self.assertEqual(events, [1, 2])

    def test_body_failure_closes_group(self):
        namespace = {}

        def body():
            raise ValueError("broken group")

        with collect_into(namespace):
            with self.assertRaises(ValueError):
                register_group("broken", body)
            # registration continues at module level
            register_test("after", lambda: None)

        self.assertIn('test_after', namespace)
        self.assertNotIn('TestBroken', namespace)

    def test_skip_mark(self):
        namespace = {}
        with collect_into(namespace):
            cls = register_group.skip("skipped", lambda: None)

        self.assertEqual([m.name for m in cls.pytestmark], ['skip'])

    def test_hooks_outside_group(self):
        with self.assertRaises(RuntimeError):
            register_group.before_all(lambda: None)
        with self.assertRaises(RuntimeError):
            GroupRegistrar.after_all(lambda: None)


@pytest.mark.parametrize('name, attr', [
    ("simple", "test_simple"),
    ("with spaces and CAPS", "test_with_spaces_and_caps"),
    ("  punctuation: a/b!  ", "test_punctuation_a_b"),
    ("???", "test_scenario"),
])
def test_test_names(name, attr):
    namespace = {}
    with collect_into(namespace):
        register_test(name, lambda: None)

    assert list(namespace) == [attr]


@pytest.mark.parametrize('name, attr', [
    ("accounts", "TestAccounts"),
    ("district admin users", "TestDistrictAdminUsers"),
    ("createUser flow", "TestCreateUserFlow"),
])
def test_group_names(name, attr):
    namespace = {}
    with collect_into(namespace):
        register_group(name, lambda: None)

    assert list(namespace) == [attr]


def test_caller_path():
    assert caller_path() == __file__
