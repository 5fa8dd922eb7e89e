import pytest

from todocli.config import Config, ConfigError, MySQLConfig, find_config_path, load_config


def write(tmp_path, text, name="config.yaml"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


def test_path_from_environment_wins():
    assert find_config_path(["--config", "other.yaml"], {"ConfigPath": "cfg.yaml"}) == "cfg.yaml"


def test_path_from_flag():
    assert find_config_path(["--config", "c.yaml"], {}) == "c.yaml"


def test_path_from_flag_with_equals_among_other_args():
    assert find_config_path(["add", "--title", "x", "--config=c.yaml"], {}) == "c.yaml"


def test_missing_path_raises():
    with pytest.raises(ConfigError, match="--config"):
        find_config_path([], {})


def test_defaults_applied(tmp_path):
    path = write(tmp_path, "env: dev\nmysql:\n  dbname: todo\n")
    cfg = load_config(path, {})
    assert cfg == Config(env="dev", mysql=MySQLConfig(dbname="todo"))
    assert (cfg.mysql.host, cfg.mysql.port, cfg.mysql.user, cfg.mysql.password) == (
        "localhost",
        3306,
        "root",
        "",
    )


def test_file_values_used(tmp_path):
    path = write(
        tmp_path,
        "env: prod\nmysql:\n  host: db\n  port: 3307\n  user: app\n  password: password\n  dbname: tasks\n",
    )
    cfg = load_config(path, {})
    password = "password"
    assert cfg.mysql == MySQLConfig(dbname="tasks", host="db", port=3307, user="app", password=password)
    assert cfg.env == "prod"


def test_environment_overrides_file(tmp_path):
    path = write(tmp_path, "env: dev\nmysql:\n  host: db\n  port: 3307\n  dbname: todo\n")
    cfg = load_config(path, {"HOST": "other", "PORT": "4000", "ENV": "test", "USER": "me"})
    assert cfg.mysql.host == "other"
    assert cfg.mysql.port == 4000
    assert cfg.mysql.user == "me"
    assert cfg.env == "test"


def test_env_from_environment_only(tmp_path):
    path = write(tmp_path, "mysql:\n  dbname: todo\n")
    assert load_config(path, {"ENV": "dev"}).env == "dev"


def test_missing_env_raises(tmp_path):
    path = write(tmp_path, "mysql:\n  dbname: todo\n")
    with pytest.raises(ConfigError, match="env"):
        load_config(path, {})


def test_missing_dbname_raises(tmp_path):
    path = write(tmp_path, "env: dev\nmysql:\n  host: db\n")
    with pytest.raises(ConfigError, match="dbname"):
        load_config(path, {})


def test_bad_port_raises(tmp_path):
    path = write(tmp_path, "env: dev\nmysql:\n  dbname: todo\n")
    with pytest.raises(ConfigError):
        load_config(path, {"PORT": "abc"})


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError, match="doesn't exist"):
        load_config(tmp_path / "nope.yaml", {})


def test_json_file(tmp_path):
    path = write(tmp_path, '{"env": "dev", "mysql": {"dbname": "todo"}}', name="config.json")
    assert load_config(path, {}).mysql.dbname == "todo"


def test_unsupported_format(tmp_path):
    path = write(tmp_path, "env=dev", name="config.ini")
    with pytest.raises(ConfigError):
        load_config(path, {})