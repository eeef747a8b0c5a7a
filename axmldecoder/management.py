# -*- coding:UTF-8 -*-
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

'''管理命令
'''

import argparse
import os
import sys
import zipfile

from axmldecoder.util import logger, set_log_level

DEFAULT_ENTRY = 'AndroidManifest.xml'


def read_axml(path, entry=None):
    '''读取AXML数据, path为apk时读取其中的entry文件

    :param path:  AXML文件或apk文件路径
    :type  path:  string
    :param entry: apk内的文件路径, 默认为AndroidManifest.xml
    :type  entry: string
    '''
    if zipfile.is_zipfile(path):
        entry = entry or DEFAULT_ENTRY
        with zipfile.ZipFile(path, 'r') as fp:
            if entry not in fp.namelist():
                raise RuntimeError('file %s not in apk %s' % (entry, path))
            logger.info('read %s from %s' % (entry, path))
            return fp.read(entry)
    with open(path, 'rb') as fp:
        return fp.read()


def _write_output(data, out_path):
    if out_path:
        with open(out_path, 'wb') as fp:
            fp.write(data)
    else:
        sys.stdout.write(data.decode('utf8', 'replace'))
        sys.stdout.flush()


def decode_axml(args):
    from axmldecoder.decoder import decode_xml
    from axmldecoder.resolver import AndroidAttrResolver, NO_RESOLUTION
    data = read_axml(args.path, args.entry)
    resolver = AndroidAttrResolver() if args.android_attrs else NO_RESOLUTION
    result = decode_xml(data, resolver)
    if result is data:
        logger.warning('%s is not a binary xml file, output unchanged' % args.path)
    _write_output(result, args.out_path)


def encode_xml(args):
    from axmldecoder.encoder import AXMLWriter
    with open(args.path, 'rb') as fp:
        writer = AXMLWriter.from_xml(fp.read())
    writer.save(args.out_path)
    print('Save binary xml to %s' % args.out_path)


def dump_axml(args):
    from axmldecoder.chunk import ResXMLTreeChunk, parse_chunks
    from axmldecoder.dispatcher import sort_by_offset
    data = read_axml(args.path, args.entry)

    def _dump(chunk, indent):
        print('%s[%d] %s' % (' ' * indent * 4, chunk.offset, chunk.__class__.__name__))
        print(chunk.dump_header(indent + 1))
        if isinstance(chunk, ResXMLTreeChunk):
            for child in sort_by_offset(chunk.chunks):
                _dump(child, indent + 1)

    for chunk in parse_chunks(data):
        _dump(chunk, 0)


def axml_manage_main(argv=None):
    parser = argparse.ArgumentParser(prog='axml-manage')
    parser.add_argument('--log-level', help='screen log level, such as DEBUG/INFO/WARNING')
    subparsers = parser.add_subparsers(help='subcommand')

    decode_parser = subparsers.add_parser('decode', help='decode binary xml to text xml')
    decode_parser.add_argument('-p', '--path', required=True, help='path of binary xml or apk file')
    decode_parser.add_argument('-e', '--entry', help='file path in apk, default is %s' % DEFAULT_ENTRY)
    decode_parser.add_argument('-o', '--out-path', help='out xml path, default is stdout')
    decode_parser.add_argument('--android-attrs', action='store_true', default=False, help='resolve android attribute ids to names')
    decode_parser.set_defaults(func=decode_axml)

    encode_parser = subparsers.add_parser('encode', help='encode text xml to binary xml')
    encode_parser.add_argument('-p', '--path', required=True, help='path of text xml file')
    encode_parser.add_argument('-o', '--out-path', required=True, help='out binary xml path')
    encode_parser.set_defaults(func=encode_xml)

    dump_parser = subparsers.add_parser('dump', help='dump chunks of binary xml')
    dump_parser.add_argument('-p', '--path', required=True, help='path of binary xml or apk file')
    dump_parser.add_argument('-e', '--entry', help='file path in apk, default is %s' % DEFAULT_ENTRY)
    dump_parser.set_defaults(func=dump_axml)

    args = parser.parse_args(argv)
    if args.log_level:
        set_log_level(args.log_level.upper())

    if hasattr(args, 'func'):
        args.func(args)
    else:
        parser.print_help()
        print('\n%s: error: too few arguments' % os.path.split(sys.argv[0])[-1], file=sys.stderr)


if __name__ == '__main__':
    axml_manage_main()
