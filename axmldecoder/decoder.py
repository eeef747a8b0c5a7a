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

'''AXML解码入口
'''

from axmldecoder.chunk import ResXMLTreeChunk, parse_chunks
from axmldecoder.dispatcher import visit_chunks
from axmldecoder.printer import XmlPrinter
from axmldecoder.resolver import NO_RESOLUTION
from axmldecoder.util import logger

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'


def decode_xml(data, resolver=NO_RESOLUTION):
    '''将AXML数据解码为文本xml

    数据不是单个XML树chunk时原样返回data

    :param data:     AXML数据
    :type  data:     bytes
    :param resolver: 资源id解析器
    :type  resolver: ResourceIdResolver
    :returns: bytes
    '''
    chunks = parse_chunks(data)
    if len(chunks) != 1:
        logger.warning('[decode_xml] Expected 1, but got %d chunks' % len(chunks))
        return data

    if not isinstance(chunks[0], ResXMLTreeChunk):
        logger.warning('[decode_xml] First chunk is not an xml chunk: %s' % chunks[0].__class__.__name__)
        return data

    printer = XmlPrinter(resolver)
    visit_chunks(chunks[0].chunks, printer)
    reconstructed_xml = XML_DECLARATION + printer.get_reconstructed_xml()
    return reconstructed_xml.encode('utf8')
