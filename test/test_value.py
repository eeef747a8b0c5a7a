# -*- coding: UTF-8 -*-
#
# Tencent is pleased to support the open source community by making QTA available.
# Copyright (C) 2016THL A29 Limited, a Tencent company. All rights reserved.
# Licensed under the BSD 3-Clause License (the "License"); you may not use this
# file except in compliance with the License. You may obtain a copy of the License at
#
# https://opensource.org/licenses/BSD-3-Clause
#
# Unless required by applicable law or agreed to in writing, software distributed
# under the License is distributed on an "AS IS" basis, WITHOUT WARRANTIES OR CONDITIONS
# OF ANY KIND, either express or implied. See the License for the specific language
# governing permissions and limitations under the License.
#

'''value模块单元测试
'''

from unittest import mock
import unittest

from axmldecoder.chunk import ResStringPoolChunk
from axmldecoder.value import (EnumResValueType, ResValue, complex_to_string, format_decimal, format_value,
                               string_to_complex, DIMENSION_UNITS, FRACTION_UNITS, UNKNOWN_UNIT)


def make_complex(mantissa, radix, unit):
    return (mantissa << 8) | (radix << 4) | unit


class TestComplexToString(unittest.TestCase):
    '''complex_to_string测试用例
    '''

    def test_integer_radix(self):
        self.assertEqual(complex_to_string(make_complex(1, 0, 1), False), '1dp')
        self.assertEqual(complex_to_string(make_complex(16, 0, 2), False), '16sp')

    def test_mantissa_is_shifted_by_radix(self):
        # radix 0 表示23p0, 尾数即整数部分
        self.assertEqual(complex_to_string(make_complex(0x800000, 0, 1), False), '8388608dp')
        self.assertEqual(complex_to_string(make_complex(0x800000, 3, 1), False), '1dp')
        self.assertEqual(complex_to_string(make_complex(0x80, 1, 0), False), '1px')
        self.assertEqual(complex_to_string(make_complex(0xC0, 1, 1), False), '1.5dp')
        self.assertEqual(complex_to_string(make_complex(0x4000, 2, 3), False), '0.5pt')

    def test_fraction(self):
        self.assertEqual(complex_to_string(make_complex(0x800000, 3, 0), True), '100%')
        self.assertEqual(complex_to_string(make_complex(0x400000, 3, 1), True), '50%p')
        self.assertEqual(complex_to_string(make_complex(1, 0, 1), True), '100%p')

    def test_fractional_digits(self):
        self.assertEqual(complex_to_string(0x0CCCCD32, False), '0.1sp')
        self.assertEqual(complex_to_string(make_complex(1, 3, 0), False), '0px')

    def test_unknown_unit(self):
        self.assertEqual(complex_to_string(make_complex(1, 0, 6), False), '1' + UNKNOWN_UNIT)
        self.assertEqual(complex_to_string(make_complex(1, 0, 15), False), '1???')
        self.assertEqual(complex_to_string(make_complex(1, 3, 2), True), '0.000012???')

    def test_every_input_has_unit(self):
        for value in (0, 1, 0xF, 0x30, 0xFF, 0x80000000, 0xFFFFFFFF, 0x7FFFFFFF, 0x12345678, -1):
            for is_fraction in (False, True):
                units = (FRACTION_UNITS if is_fraction else DIMENSION_UNITS) + (UNKNOWN_UNIT,)
                text = complex_to_string(value, is_fraction)
                self.assertTrue(text)
                self.assertTrue(any(text.endswith(it) for it in units), text)

    def test_string_to_complex(self):
        self.assertEqual(complex_to_string(string_to_complex(16.0, 'dp'), False), '16dp')
        self.assertEqual(complex_to_string(string_to_complex(1.5, 'sp'), False), '1.5sp')
        self.assertEqual(complex_to_string(string_to_complex(0.25, 'mm'), False), '0.25mm')
        self.assertEqual(complex_to_string(string_to_complex(50.0, '%', True), True), '50%')
        self.assertEqual(complex_to_string(string_to_complex(100.0, '%p', True), True), '100%p')
        self.assertRaises(ValueError, string_to_complex, -1.0, 'dp')

    def test_string_to_complex_sign_bit_clear(self):
        for value in (1.0, 1.5, 300.0, 65536.0, 0.999):
            data = string_to_complex(value, 'dp')
            self.assertEqual(data & 0x80000000, 0, '%s -> 0x%08x' % (value, data))
            self.assertEqual(complex_to_string(data, False), '%sdp' % format_decimal(value))
        self.assertEqual(string_to_complex(1.0, 'dp'), 0x00800021)
        self.assertEqual(string_to_complex(300.0, 'dp'), 0x00960011)
        self.assertEqual(string_to_complex(100.0, '%p', True), 0x00800021)


class TestFormatDecimal(unittest.TestCase):
    '''format_decimal测试用例
    '''

    def test_strip_trailing_zeros(self):
        self.assertEqual(format_decimal(1.0), '1')
        self.assertEqual(format_decimal(1.5), '1.5')
        self.assertEqual(format_decimal(0.0), '0')
        self.assertEqual(format_decimal(-2.25), '-2.25')

    def test_round_half_even(self):
        self.assertEqual(format_decimal(0.0000015), '0.000002')
        self.assertEqual(format_decimal(0.0000025), '0.000002')
        self.assertEqual(format_decimal(0.0000004), '0')
        self.assertEqual(format_decimal(1.2345674), '1.234567')

    def test_no_scientific_notation(self):
        self.assertEqual(format_decimal(1e20), '100000000000000000000')
        self.assertEqual(format_decimal(1e-5), '0.00001')

    def test_special_values(self):
        self.assertEqual(format_decimal(float('nan')), 'NaN')
        self.assertEqual(format_decimal(float('inf')), '∞')
        self.assertEqual(format_decimal(float('-inf')), '-∞')


class TestFormatValue(unittest.TestCase):
    '''format_value测试用例
    '''

    def _format(self, data_type, data, string_pool=None, resolver=None):
        return format_value(ResValue(data_type=data_type, data=data), string_pool, resolver)

    def test_null(self):
        self.assertEqual(self._format(EnumResValueType.TYPE_NULL, 1), '@empty')
        self.assertEqual(self._format(EnumResValueType.TYPE_NULL, 0), '@null')

    def test_reference(self):
        self.assertEqual(self._format(EnumResValueType.TYPE_REFERENCE, 0), '@null')
        self.assertEqual(self._format(EnumResValueType.TYPE_REFERENCE, 0x01010000), '@ref/0x1010000')
        self.assertEqual(self._format(EnumResValueType.TYPE_DYNAMIC_REFERENCE, 0x7f020001), '@ref/0x7f020001')
        self.assertEqual(self._format(EnumResValueType.TYPE_DYNAMIC_REFERENCE, 0), '@null')

    def test_reference_uses_resolver(self):
        resolver = mock.Mock()
        resolver.resolve.return_value = '@string/app_name'
        self.assertEqual(self._format(EnumResValueType.TYPE_REFERENCE, 0x7f0b0001, resolver=resolver), '@string/app_name')
        resolver.resolve.assert_called_once_with(0x7f0b0001)

    def test_attribute(self):
        self.assertEqual(self._format(EnumResValueType.TYPE_ATTRIBUTE, 0x01010000), '?ref/0x1010000')
        resolver = mock.Mock()
        resolver.resolve.return_value = '@android:attr/textColorPrimary'
        self.assertEqual(self._format(EnumResValueType.TYPE_DYNAMIC_ATTRIBUTE, 0x01010036, resolver=resolver), '?android:attr/textColorPrimary')

    def test_string(self):
        pool = ResStringPoolChunk()
        pool.add_string('first')
        pool.add_string('last')
        self.assertEqual(self._format(EnumResValueType.TYPE_STRING, 0, pool), 'first')
        self.assertEqual(self._format(EnumResValueType.TYPE_STRING, pool.string_count - 1, pool), 'last')
        self.assertEqual(self._format(EnumResValueType.TYPE_STRING, pool.string_count, pool), '@string/0x2')
        self.assertEqual(self._format(EnumResValueType.TYPE_STRING, 0x1f), '@string/0x1f')
        self.assertEqual(self._format(EnumResValueType.TYPE_STRING, 0xFFFFFFFF, pool), '@string/0xffffffff')

    def test_dimension_and_fraction(self):
        self.assertEqual(self._format(EnumResValueType.TYPE_DIMENSION, make_complex(1, 0, 1)), '1dp')
        self.assertEqual(self._format(EnumResValueType.TYPE_FRACTION, make_complex(0x800000, 3, 0)), '100%')

    def test_float(self):
        self.assertEqual(self._format(EnumResValueType.TYPE_FLOAT, 0x3FC00000), '1.5')
        self.assertEqual(self._format(EnumResValueType.TYPE_FLOAT, 0x3DCCCCCD), '0.1')
        self.assertEqual(self._format(EnumResValueType.TYPE_FLOAT, 0xBF800000), '-1')
        self.assertEqual(self._format(EnumResValueType.TYPE_FLOAT, 0), '0')

    def test_int(self):
        self.assertEqual(self._format(EnumResValueType.TYPE_INT_DEC, 42), '42')
        self.assertEqual(self._format(EnumResValueType.TYPE_INT_DEC, 0xFFFFFFFF), '-1')
        self.assertEqual(self._format(EnumResValueType.TYPE_INT_HEX, 0x10), '0x10')
        self.assertEqual(self._format(EnumResValueType.TYPE_INT_HEX, 0xFFFFFFFF), '0xffffffff')

    def test_boolean(self):
        self.assertEqual(self._format(EnumResValueType.TYPE_INT_BOOLEAN, 0), 'false')
        self.assertEqual(self._format(EnumResValueType.TYPE_INT_BOOLEAN, 1), 'true')
        self.assertEqual(self._format(EnumResValueType.TYPE_INT_BOOLEAN, 0xFFFFFFFF), 'true')

    def test_color(self):
        self.assertEqual(self._format(EnumResValueType.TYPE_INT_COLOR_ARGB8, 0x80FF0000), '#80FF0000')
        self.assertEqual(self._format(EnumResValueType.TYPE_INT_COLOR_ARGB8, 0xFF), '#000000FF')
        self.assertEqual(self._format(EnumResValueType.TYPE_INT_COLOR_RGB8, 0xFF00FF00), '#00FF00')
        self.assertEqual(self._format(EnumResValueType.TYPE_INT_COLOR_ARGB4, 0x1234F0F0), '#F0F0')
        self.assertEqual(self._format(EnumResValueType.TYPE_INT_COLOR_RGB4, 0xFFFF0ABC), '#ABC')

    def test_unknown_type(self):
        self.assertEqual(self._format(0x20, 0x1234), '@res/0x1234')
        self.assertEqual(self._format(0x09, 0), '@res/0x0')

    def test_idempotent(self):
        pool = ResStringPoolChunk()
        pool.add_string('text')
        for data_type, data in ((EnumResValueType.TYPE_STRING, 0), (EnumResValueType.TYPE_DIMENSION, 0x0CCCCD32),
                                (EnumResValueType.TYPE_FLOAT, 0x3DCCCCCD), (EnumResValueType.TYPE_REFERENCE, 0x7f010001)):
            res_value = ResValue(data_type=data_type, data=data)
            self.assertEqual(res_value.format_value(pool), res_value.format_value(pool))


class TestResValue(unittest.TestCase):
    '''ResValue测试用例
    '''

    def test_serialize(self):
        res_value = ResValue(data_type=EnumResValueType.TYPE_INT_DEC, data=1)
        self.assertEqual(res_value.serialize(), b'\x08\x00\x00\x10\x01\x00\x00\x00')

    def test_float(self):
        res_value = ResValue()
        res_value.set_float(1.5)
        self.assertEqual(res_value.data, 0x3FC00000)
        self.assertEqual(res_value.get_float(), 1.5)

    def test_convert_from(self):
        cases = [
            ('@0x7f010001', EnumResValueType.TYPE_REFERENCE, 0x7f010001),
            ('@null', EnumResValueType.TYPE_REFERENCE, 0),
            ('@empty', EnumResValueType.TYPE_NULL, 1),
            ('0x1F', EnumResValueType.TYPE_INT_HEX, 0x1f),
            ('21', EnumResValueType.TYPE_INT_DEC, 21),
            ('-1', EnumResValueType.TYPE_INT_DEC, 0xFFFFFFFF),
            ('1.5f', EnumResValueType.TYPE_FLOAT, 0x3FC00000),
            ('false', EnumResValueType.TYPE_INT_BOOLEAN, 0),
            ('#80ff0000', EnumResValueType.TYPE_INT_COLOR_ARGB8, 0x80FF0000),
            ('#abc', EnumResValueType.TYPE_INT_COLOR_RGB4, 0xABC),
            ('com.example', EnumResValueType.TYPE_STRING, 0xFFFFFFFF),
        ]
        for text, data_type, data in cases:
            res_value = ResValue.convert_from(text)
            self.assertEqual((res_value.data_type, res_value.data), (data_type, data), text)

    def test_convert_from_complex(self):
        self.assertEqual(ResValue.convert_from('16dp').format_value(), '16dp')
        self.assertEqual(ResValue.convert_from('12.5sp').format_value(), '12.5sp')
        self.assertEqual(ResValue.convert_from('50%').format_value(), '50%')
        self.assertEqual(ResValue.convert_from('50%p').data_type, EnumResValueType.TYPE_FRACTION)


if __name__ == '__main__':
    unittest.main()
