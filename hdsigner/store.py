
#
# Python-hdsigner -- Ethereum HD Identity and Wallet Signing
#
# Copyright (c) 2022, Dominion Research & Development Corp.
#
# Python-hdsigner is free software: you can redistribute it and/or modify it under
# the terms of the GNU General Public License as published by the Free Software
# Foundation, either version 3 of the License, or (at your option) any later
# version.  It is also available under alternative (eg. Commercial) licenses, at
# your option.  See the LICENSE file at the top of the source tree.
#
# Python-hdsigner is distributed in the hope that it will be useful, but WITHOUT
# ANY WARRANTY; without even the implied warranty of MERCHANTABILITY or FITNESS
# FOR A PARTICULAR PURPOSE. See the GNU General Public License for more details.
#
from __future__		import annotations

import json
import logging
import os

from typing		import Dict, Optional

from .defaults		import STORE_PATH

log				= logging.getLogger( __package__ )


class FileStore:
    """A simple persistent secret store; a JSON dict of str keys and values in a file readable only by
    its owner.  Any object with the same store/retrieve methods may be used in its place (eg. an OS
    keychain).

    Each store rewrites the whole file, via a temporary file renamed into place, so a crash never
    leaves a partially written Mnemonic behind.

    """
    def __init__( self, path: Optional[str] = None ):
        self.path		= path or STORE_PATH

    def __repr__( self ):
        return f"{self.__class__.__name__}({self.path!r})"

    def _load( self ) -> Dict[str,str]:
        try:
            with open( self.path, 'r' ) as store_f:
                content		= json.load( store_f )
        except FileNotFoundError:
            return {}
        if not isinstance( content, dict ):
            raise ValueError( f"Secret store {self.path} does not contain a JSON object" )
        return content

    def retrieve( self, key: str ) -> Optional[str]:
        value			= self._load().get( key )
        log.debug( f"Retrieved {key!r} from {self.path}: {'found' if value is not None else 'missing'}" )
        return value

    def store( self, key: str, value: str ):
        content			= self._load()
        content[key]		= value
        directory		= os.path.dirname( os.path.abspath( self.path ))
        os.makedirs( directory, mode=0o700, exist_ok=True )
        temporary		= self.path + '.new'
        descriptor		= os.open( temporary, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600 )
        try:
            with os.fdopen( descriptor, 'w' ) as store_f:
                json.dump( content, store_f, indent=4 )
            os.replace( temporary, self.path )
        finally:
            # Only remains if the write or rename failed
            if os.path.exists( temporary ):
                os.remove( temporary )
        log.info( f"Stored {key!r} in {self.path}" )
