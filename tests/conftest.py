"""Pin the Jenkins settings the client module reads at import time."""

import os

os.environ["JENKINS_URL"] = "http://jenkins.test"
os.environ["JENKINS_USER"] = "tester"
os.environ["JENKINS_TOKEN"] = "secret-token"
os.environ["JENKINS_DISPLAY_NAME"] = "Jenkins"
os.environ["JENKINS_VERIFY_SSL"] = "true"
