from apparel_designer.config import Config
from apparel_designer.main import parse_args


def test_parse_args_defaults():
    args = parse_args([])
    assert args.product is None
    assert args.debug is False


def test_parse_args_product():
    args = parse_args(['--product', 'Team Hoodie', '--debug'])
    assert args.product == 'Team Hoodie'
    assert args.debug is True


def test_settings_round_trip(user_data_dir):
    assert Config.load_setting('last_product') is None
    assert Config.save_setting('last_product', 'Team Polo')
    assert Config.load_setting('last_product') == 'Team Polo'
    assert Config.get_settings_file().parent == user_data_dir


def test_sanitize_file_name():
    assert Config.sanitize_file_name('Home: Kit?') == 'Home_ Kit_'
    assert Config.sanitize_file_name(' .. ') == 'design'
