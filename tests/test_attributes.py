import unittest

from omicron.parser import parse, parse_number
from omicron.error import InvalidAttrError


class TestParseNumber(unittest.TestCase):
    def test_decimal(self):
        self.assertEqual(parse_number('66666'), 66666)
        self.assertEqual(parse_number('0'), 0)
        self.assertEqual(parse_number('-5'), -5)
        self.assertEqual(parse_number('2147483647'), 2147483647)

    def test_hex(self):
        self.assertEqual(parse_number('0x42069'), 270441)
        self.assertEqual(parse_number('-0x10'), -16)
        self.assertEqual(parse_number('0xff'), 255)
        self.assertEqual(parse_number('0xFFFFFFFF'), -1)
        self.assertEqual(parse_number('0x80000000'), -(1 << 31))
        self.assertEqual(parse_number('0x+10'), 16)
        self.assertEqual(parse_number('-0x+10'), -16)

    def test_invalid(self):
        for value in ('abc', '', '-', '0x', '0x+', '0xg1', '0X10', '1 2', ' 5', '5?', '0x100000000',
                      '2147483648', '1_000'):
            with self.subTest(value=value):
                with self.assertRaises(InvalidAttrError):
                    parse_number(value)


class TestAttributes(unittest.TestCase):
    def test_offset(self):
        parsed = parse('name A\n[offset = "16"] var int a\n[offset = "0x20"]\nvar int b')
        self.assertEqual([v.offset for v in parsed.variables], [16, 32])

    def test_scope(self):
        parsed = parse('''
name A
[offset = "4"] var int a
var int b
[sig = "E8 ??", vfunc = "3"] func f()
func g()
''')
        self.assertEqual(parsed.get_variable('a').offset, 4)
        self.assertEqual(parsed.get_variable('b').offset, 0)

        f = parsed.get_function('f')
        self.assertEqual(f.sig, 'E8 ??')
        self.assertEqual(f.vfunc, 3)
        self.assertTrue(f.is_virtual)

        g = parsed.get_function('g')
        self.assertIsNone(g.sig)
        self.assertIsNone(g.vfunc)
        self.assertFalse(g.is_virtual)

    def test_accumulate(self):
        parsed = parse('name A\n[sig = "AA BB"]\n# comment\n[vfunc = "0x10"]\nfunc f()')

        f = parsed.functions[0]
        self.assertEqual(f.sig, 'AA BB')
        self.assertEqual(f.vfunc, 16)

    def test_comment_logged(self):
        with self.assertLogs('omicron.parser', level='DEBUG') as cm:
            parse('name A\n# padding for alignment\nvar int a')

        self.assertTrue(any('padding for alignment' in line for line in cm.output))

    def test_first_attribute_wins(self):
        parsed = parse('name A\n[offset = "1", offset = "2"] var int a')
        self.assertEqual(parsed.variables[0].offset, 1)

    def test_unknown_attributes_flushed(self):
        with self.assertLogs('omicron.parser', level='WARNING') as cm:
            parsed = parse('name A\n[sig = "AA", vfunc = "1"] var int a\nfunc f()')

        self.assertEqual(len(cm.output), 2)
        self.assertEqual(parsed.variables[0].offset, 0)
        self.assertIsNone(parsed.functions[0].sig)
        self.assertIsNone(parsed.functions[0].vfunc)

    def test_invalid_value(self):
        with self.assertRaises(InvalidAttrError) as cm:
            parse('name A\n[offset = "abc"] var int a')

        self.assertEqual(cm.exception.name, 'offset')
        self.assertEqual(cm.exception.value, 'abc')

        with self.assertRaises(InvalidAttrError):
            parse('name A\n[vfunc = "0x"] func f()')

    def test_sig_not_numeric(self):
        parsed = parse('name A\n[sig = "not a number"] func f()')
        self.assertEqual(parsed.functions[0].sig, 'not a number')

    def test_trailing(self):
        with self.assertRaises(InvalidAttrError):
            parse('name A\n[offset = "4"]')

        with self.assertRaises(InvalidAttrError):
            parse('name A\nfunc f()\n[vfunc = "1"]\n# nothing follows')


if __name__ == '__main__':
    unittest.main()
