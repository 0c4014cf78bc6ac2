"""
A minimal HTTP/1.1 server built on curio.

Each accepted connection carries exactly one request and one response,
then it is closed.

routes:

GET  /                   200, empty body
GET  /echo/{text}        200, text/plain body {text}
GET  /user-agent         200, text/plain body of the User-Agent header
GET  /files/{name}       200, file contents (only with --directory)
POST /files/{name}       201, request body written to file (only with --directory)

examples:

# listen on 127.0.0.1:4221
minihttpd -v

# serve and accept files from /tmp/www
minihttpd -v --directory /tmp/www --port 8080
"""
__version__ = "0.1.0"
