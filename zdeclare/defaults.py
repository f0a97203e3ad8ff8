ZDECLARE_CONFIG_PATH_DEFAULT = "/etc/zdeclare/config.yml"
