import json
import os
import stat

import pytest

from .store		import FileStore

from .dependency_test	import substitute


def test_file_store( tmp_path ):
    path			= str( tmp_path / "nested" / "dir" / "store.json" )
    store			= FileStore( path )
    assert store.retrieve( "mnemonic" ) is None
    assert not os.path.exists( path )

    store.store( "mnemonic", "abandon about" )
    store.store( "mnemonic_persisted", "true" )
    assert store.retrieve( "mnemonic" ) == "abandon about"
    assert FileStore( path ).retrieve( "mnemonic_persisted" ) == "true"
    assert FileStore( path ).retrieve( "other" ) is None

    assert stat.S_IMODE( os.stat( path ).st_mode ) == 0o600
    assert not os.path.exists( path + '.new' )
    with open( path ) as f:
        assert json.load( f ) == { "mnemonic": "abandon about", "mnemonic_persisted": "true" }


def test_file_store_overwrite( tmp_path ):
    path			= str( tmp_path / "store.json" )
    FileStore( path ).store( "key", "one" )
    FileStore( path ).store( "key", "two" )
    assert FileStore( path ).retrieve( "key" ) == "two"


def failing_dump( content, store_f, **kwds ):
    store_f.write( '{ "partial' )
    raise OSError( "Disk full" )


def test_file_store_failure( tmp_path ):
    """A failed write leaves the prior store intact, and no temporary file behind"""
    path			= str( tmp_path / "store.json" )
    FileStore( path ).store( "key", "one" )
    with substitute( json, 'dump', failing_dump ):
        with pytest.raises( OSError ):
            FileStore( path ).store( "key", "two" )
    assert not os.path.exists( path + '.new' )
    assert FileStore( path ).retrieve( "key" ) == "one"
