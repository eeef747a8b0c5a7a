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

'''按文件顺序分发XML树中的chunk
'''

from axmldecoder.chunk import (ResStringPoolChunk, ResXMLResourceMapChunk,
                               ResXMLStartNamespaceChunk, ResXMLEndNamespaceChunk,
                               ResXMLStartElementChunk, ResXMLEndElementChunk)
from axmldecoder.util import logger


class XmlChunkHandler(object):
    '''chunk回调接口, 默认不做任何处理
    '''

    def string_pool(self, chunk):
        pass

    def xml_resource_map(self, chunk):
        pass

    def start_namespace(self, chunk):
        pass

    def end_namespace(self, chunk):
        pass

    def start_element(self, chunk):
        pass

    def end_element(self, chunk):
        pass


CHUNK_CALLBACKS = (
    (ResStringPoolChunk, 'string_pool'),
    (ResXMLResourceMapChunk, 'xml_resource_map'),
    (ResXMLStartNamespaceChunk, 'start_namespace'),
    (ResXMLEndNamespaceChunk, 'end_namespace'),
    (ResXMLStartElementChunk, 'start_element'),
    (ResXMLEndElementChunk, 'end_element'),
)


def sort_by_offset(chunks):
    '''按chunk在文件中的偏移排序

    :param chunks: {偏移: chunk}
    :type  chunks: dict
    :returns: list
    '''
    return [chunks[offset] for offset in sorted(chunks)]


def visit_chunks(chunks, handler):
    '''按偏移顺序将每个chunk分发到handler的对应回调, 未知类型的chunk直接忽略

    :param chunks:  {偏移: chunk}
    :type  chunks:  dict
    :param handler: 回调对象
    :type  handler: XmlChunkHandler
    '''
    for chunk in sort_by_offset(chunks):
        for chunk_class, callback in CHUNK_CALLBACKS:
            if isinstance(chunk, chunk_class):
                getattr(handler, callback)(chunk)
                break
        else:
            logger.debug('[visit_chunks] XmlNode of type %s not handled' % chunk.__class__.__name__)
