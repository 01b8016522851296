import config


def test_postgres_engine_options_bound_every_call():
    options = config.build_engine_options(
        'postgresql://u:p@db:5432/state',
        pool_timeout=7,
        connect_timeout=3,
        statement_timeout_ms=2500,
    )
    assert options['pool_pre_ping'] is True
    assert options['pool_timeout'] == 7
    assert options['connect_args']['connect_timeout'] == 3
    assert options['connect_args']['options'] == '-c statement_timeout=2500'
    assert 'sslmode' not in options['connect_args']


def test_postgres_engine_options_pass_sslmode():
    options = config.build_engine_options('postgresql://u:p@db/state', sslmode='require')
    assert options['connect_args']['sslmode'] == 'require'


def test_sqlite_keeps_default_engine_options():
    assert config.build_engine_options('sqlite://') == {}


def test_legacy_postgres_scheme_is_rewritten(monkeypatch):
    monkeypatch.setenv('DATABASE_URL', 'postgres://u:p@db:5432/state')
    assert config._database_url() == 'postgresql://u:p@db:5432/state'


def test_default_database_url_is_postgres(monkeypatch):
    monkeypatch.delenv('DATABASE_URL', raising=False)
    assert config._database_url().startswith('postgresql://')


def test_env_flag_parsing(monkeypatch):
    monkeypatch.setenv('REQUIRE_SIGNATURE', 'Yes')
    assert config._env_flag('REQUIRE_SIGNATURE') is True
    monkeypatch.setenv('REQUIRE_SIGNATURE', '0')
    assert config._env_flag('REQUIRE_SIGNATURE') is False
    monkeypatch.delenv('REQUIRE_SIGNATURE')
    assert config._env_flag('REQUIRE_SIGNATURE', True) is True
