"""Curated catalog of Go standard library items and a ranked search over it."""

from go_docs_mcp.models import StdLibItem

# (name, kind, package, signature, description)
_CATALOG: tuple[tuple[str, str, str, str, str], ...] = (
    # fmt
    ("fmt", "package", "fmt", "", "Formatted I/O with functions analogous to C's printf and scanf"),
    ("fmt.Println", "function", "fmt", "func Println(a ...any) (n int, err error)", "Print operands to standard output, separated by spaces, with a trailing newline"),
    ("fmt.Printf", "function", "fmt", "func Printf(format string, a ...any) (n int, err error)", "Print to standard output according to a format specifier"),
    ("fmt.Sprintf", "function", "fmt", "func Sprintf(format string, a ...any) string", "Format according to a format specifier and return the resulting string"),
    ("fmt.Fprintf", "function", "fmt", "func Fprintf(w io.Writer, format string, a ...any) (n int, err error)", "Format according to a format specifier and write to w"),
    ("fmt.Errorf", "function", "fmt", "func Errorf(format string, a ...any) error", "Format according to a format specifier and return the string as an error value; %w wraps an error"),
    ("fmt.Sscanf", "function", "fmt", "func Sscanf(str string, format string, a ...any) (n int, err error)", "Scan the argument string, storing successive values into arguments as determined by the format"),
    ("fmt.Stringer", "type", "fmt", "type Stringer interface { String() string }", "Implemented by any value that has a String method, which defines the native format for that value"),
    # strings
    ("strings", "package", "strings", "", "Simple functions to manipulate UTF-8 encoded strings"),
    ("strings.Contains", "function", "strings", "func Contains(s, substr string) bool", "Report whether substr is within s"),
    ("strings.HasPrefix", "function", "strings", "func HasPrefix(s, prefix string) bool", "Report whether the string s begins with prefix"),
    ("strings.Split", "function", "strings", "func Split(s, sep string) []string", "Slice s into all substrings separated by sep"),
    ("strings.Join", "function", "strings", "func Join(elems []string, sep string) string", "Concatenate the elements of a slice of strings, placing sep between them"),
    ("strings.ToUpper", "function", "strings", "func ToUpper(s string) string", "Return s with all Unicode letters mapped to their upper case"),
    ("strings.TrimSpace", "function", "strings", "func TrimSpace(s string) string", "Return s with all leading and trailing white space removed"),
    ("strings.Builder", "type", "strings", "type Builder struct", "Efficiently build a string using Write methods, minimizing memory copying"),
    # strconv
    ("strconv", "package", "strconv", "", "Conversions to and from string representations of basic data types"),
    ("strconv.Itoa", "function", "strconv", "func Itoa(i int) string", "Return the decimal string representation of an int"),
    ("strconv.Atoi", "function", "strconv", "func Atoi(s string) (int, error)", "Parse a decimal string into an int"),
    # bytes
    ("bytes", "package", "bytes", "", "Functions for the manipulation of byte slices"),
    ("bytes.Buffer", "type", "bytes", "type Buffer struct", "A variable-sized buffer of bytes with Read and Write methods"),
    # os
    ("os", "package", "os", "", "Platform-independent interface to operating system functionality"),
    ("os.Open", "function", "os", "func Open(name string) (*File, error)", "Open the named file for reading"),
    ("os.ReadFile", "function", "os", "func ReadFile(name string) ([]byte, error)", "Read the named file and return its contents"),
    ("os.WriteFile", "function", "os", "func WriteFile(name string, data []byte, perm FileMode) error", "Write data to the named file, creating it if necessary"),
    ("os.Getenv", "function", "os", "func Getenv(key string) string", "Retrieve the value of the environment variable named by the key"),
    # io / bufio
    ("io", "package", "io", "", "Basic interfaces to I/O primitives"),
    ("io.Reader", "type", "io", "type Reader interface { Read(p []byte) (n int, err error) }", "Interface that wraps the basic Read method"),
    ("io.ReadAll", "function", "io", "func ReadAll(r Reader) ([]byte, error)", "Read from r until an error or EOF and return the data it read"),
    ("io.Copy", "function", "io", "func Copy(dst Writer, src Reader) (written int64, err error)", "Copy from src to dst until either EOF is reached on src or an error occurs"),
    ("bufio", "package", "bufio", "", "Buffered I/O wrapping an io.Reader or io.Writer"),
    ("bufio.Scanner", "type", "bufio", "type Scanner struct", "Convenient interface for reading data such as a file of newline-delimited lines of text"),
    # errors
    ("errors", "package", "errors", "", "Functions to manipulate errors"),
    ("errors.New", "function", "errors", "func New(text string) error", "Return an error that formats as the given text"),
    ("errors.Is", "function", "errors", "func Is(err, target error) bool", "Report whether any error in err's tree matches target"),
    ("errors.As", "function", "errors", "func As(err error, target any) bool", "Find the first error in err's tree that matches target and set target to that error value"),
    # time
    ("time", "package", "time", "", "Functionality for measuring and displaying time"),
    ("time.Now", "function", "time", "func Now() Time", "Return the current local time"),
    ("time.Sleep", "function", "time", "func Sleep(d Duration)", "Pause the current goroutine for at least the duration d"),
    ("time.Duration", "type", "time", "type Duration int64", "Elapsed time between two instants as an int64 nanosecond count"),
    # collections
    ("sort", "package", "sort", "", "Primitives for sorting slices and user-defined collections"),
    ("sort.Slice", "function", "sort", "func Slice(x any, less func(i, j int) bool)", "Sort the slice x given the provided less function"),
    ("slices", "package", "slices", "", "Generic functions useful with slices of any type"),
    ("slices.Sort", "function", "slices", "func Sort[S ~[]E, E cmp.Ordered](x S)", "Sort a slice of any ordered type in ascending order"),
    ("slices.Contains", "function", "slices", "func Contains[S ~[]E, E comparable](s S, v E) bool", "Report whether v is present in s"),
    ("maps", "package", "maps", "", "Generic functions useful with maps of any type"),
    # concurrency
    ("sync", "package", "sync", "", "Basic synchronization primitives such as mutual exclusion locks"),
    ("sync.Mutex", "type", "sync", "type Mutex struct", "A mutual exclusion lock"),
    ("sync.WaitGroup", "type", "sync", "type WaitGroup struct", "Wait for a collection of goroutines to finish"),
    ("context", "package", "context", "", "Carry deadlines, cancellation signals, and request-scoped values across API boundaries"),
    ("context.Background", "function", "context", "func Background() Context", "Return a non-nil, empty Context that is never canceled"),
    ("context.WithCancel", "function", "context", "func WithCancel(parent Context) (ctx Context, cancel CancelFunc)", "Return a copy of parent with a new Done channel closed when cancel is called"),
    ("context.WithTimeout", "function", "context", "func WithTimeout(parent Context, timeout time.Duration) (Context, CancelFunc)", "Return a copy of parent that is canceled after the timeout elapses"),
    # net/http
    ("net/http", "package", "net/http", "", "HTTP client and server implementations"),
    ("http.Get", "function", "net/http", "func Get(url string) (resp *Response, err error)", "Issue a GET to the specified URL"),
    ("http.HandleFunc", "function", "net/http", "func HandleFunc(pattern string, handler func(ResponseWriter, *Request))", "Register the handler function for the given pattern in the default mux"),
    ("http.ListenAndServe", "function", "net/http", "func ListenAndServe(addr string, handler Handler) error", "Listen on the TCP network address addr and serve requests with handler"),
    # encoding/json
    ("encoding/json", "package", "encoding/json", "", "Encoding and decoding of JSON as defined in RFC 7159"),
    ("json.Marshal", "function", "encoding/json", "func Marshal(v any) ([]byte, error)", "Return the JSON encoding of v"),
    ("json.Unmarshal", "function", "encoding/json", "func Unmarshal(data []byte, v any) error", "Parse JSON-encoded data and store the result in the value pointed to by v"),
    # misc
    ("math", "package", "math", "", "Basic constants and mathematical functions"),
    ("math.Sqrt", "function", "math", "func Sqrt(x float64) float64", "Return the square root of x"),
    ("path/filepath", "package", "path/filepath", "", "Manipulate filename paths in a way compatible with the target operating system"),
    ("filepath.Join", "function", "path/filepath", "func Join(elem ...string) string", "Join any number of path elements into a single path"),
    ("regexp", "package", "regexp", "", "Regular expression search using RE2 syntax"),
    ("regexp.MustCompile", "function", "regexp", "func MustCompile(str string) *Regexp", "Parse a regular expression and panic if it cannot be parsed"),
    ("log", "package", "log", "", "Simple logging package writing to standard error"),
    ("log.Printf", "function", "log", "func Printf(format string, v ...any)", "Print to the standard logger in the manner of fmt.Printf"),
)


def stdlib_items() -> list[StdLibItem]:
    return [
        StdLibItem(
            name=name,
            kind=kind,
            package=package,
            signature=signature,
            description=description,
        )
        for name, kind, package, signature, description in _CATALOG
    ]


def _rank(item: StdLibItem, query: str) -> int | None:
    """Lower is better; None means no match."""
    name = item.name.lower()
    if name == query:
        return 0
    if name.startswith(query):
        return 1
    if query in name:
        return 2
    if query in item.description.lower():
        return 3
    return None


def search_items(items: list[StdLibItem], query: str, limit: int = 10) -> list[StdLibItem]:
    """Items whose name or description contains ``query`` (case-insensitive).

    Ranked by exact name, name prefix, name substring, then description
    match. Ties keep catalog order. At most ``limit`` items are returned.
    """
    if limit <= 0:
        return []
    needle = query.strip().lower()
    ranked = []
    for position, item in enumerate(items):
        rank = _rank(item, needle)
        if rank is not None:
            ranked.append((rank, position, item))
    ranked.sort(key=lambda entry: (entry[0], entry[1]))
    return [item for _, _, item in ranked[:limit]]


def find_item(items: list[StdLibItem], name: str) -> StdLibItem | None:
    """Exact lookup by name, falling back to a case-insensitive match.

    Accepts the import-path form for package members, e.g.
    ``net/http.Get`` as well as ``http.Get``.
    """
    wanted = name.strip()
    for item in items:
        if item.name == wanted:
            return item
    lowered = wanted.lower()
    for item in items:
        if item.name.lower() == lowered:
            return item
        if item.kind != "package":
            member = item.name.rsplit(".", 1)[-1]
            if f"{item.package}.{member}".lower() == lowered:
                return item
    return None
