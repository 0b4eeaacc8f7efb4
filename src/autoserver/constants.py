"""Static defaults shared across AutoServer services."""

DEFAULT_PHP_VERSION = "8.2"
DEFAULT_WEB_ROOT = "/var/www/html"

NGINX_SITE_PATH = "/etc/nginx/sites-available/default"
PHP_FPM_SOCKET_TEMPLATE = "/run/php/php{version}-fpm.sock"
PHP_FPM_SERVICE_TEMPLATE = "php{version}-fpm"

DATABASE_SERVICE = "mariadb"
PROXY_SERVICE = "nginx"
DB_ADMIN_USER = "root"

PHPMYADMIN_SOURCE_DIR = "/usr/share/phpmyadmin"
PHPMYADMIN_LINK_NAME = "phpmyadmin"
PHPMYADMIN_DEBCONF_SELECTION = "phpmyadmin phpmyadmin/reconfigure-webserver multiselect none"
ADMIN_PANEL_URL = "http://<SERVER_IP>/phpmyadmin"

PASSWORD_RANDOM_BYTES = 16
PASSWORD_STRIP_CHARS = "/+="

CREDENTIALS_FILE_MODE = 0o600

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_PRIVILEGE_ERROR = 77
