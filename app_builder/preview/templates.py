"""Static pieces of the preview page.

Placeholders are `__UPPER__` markers filled by `preview.generator.fill`; the
page bodies are JSX compiled in the browser by Babel, so `${...}` and braces
belong to JavaScript and are left alone.
"""

PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>__TITLE__</title>
    <script src="https://cdn.tailwindcss.com"></script>
    <script src="https://unpkg.com/react@18/umd/react.development.js"></script>
    <script src="https://unpkg.com/react-dom@18/umd/react-dom.development.js"></script>
    <script src="https://unpkg.com/@babel/standalone/babel.min.js"></script>
    <style>
        :root {
            --primary-color: __PRIMARY__;
            --secondary-color: __SECONDARY__;
        }
        .gradient-bg { background: linear-gradient(135deg, var(--primary-color) 0%, var(--secondary-color) 100%); }
        .glass { backdrop-filter: blur(10px); background: rgba(255, 255, 255, 0.1); }
    </style>
</head>
<body>
    <div id="root"></div>
    <script type="text/babel">
__HOOKS__
__APP__
        ReactDOM.render(<App />, document.getElementById('root'));
    </script>
</body>
</html>
"""

HOOKS = """        const { useState, useEffect } = React;

        const useAuth = () => {
          const [user, setUser] = useState(__INITIAL_USER__);
          const [loading, setLoading] = useState(false);
          const login = async (email, password) => {
            setLoading(true);
            await new Promise(resolve => setTimeout(resolve, 1000));
            setUser({ id: 1, name: email.split('@')[0], email });
            setLoading(false);
          };
          return { user, login, logout: () => setUser(null), loading };
        };

        const useRealTime = () => {
          const [data, setData] = useState([]);
          useEffect(() => {
            if (!__REALTIME__) return;
            const interval = setInterval(() => {
              setData(prev => [...prev.slice(-4), {
                id: Date.now(),
                value: Math.floor(Math.random() * 100),
                timestamp: new Date().toLocaleTimeString()
              }]);
            }, 3000);
            return () => clearInterval(interval);
          }, []);
          return data;
        };
"""

SIGN_IN_BUTTON = """{user ? (
                  <span className="text-sm">Hi, {user.name}!</span>
                ) : (
                  <button onClick={() => login('demo@app.com', 'password')} className="bg-__COLOR__-500 text-white px-4 py-2 rounded">
                    Sign In
                  </button>
                )}"""

CALCULATOR = """        function App() {
          const [display, setDisplay] = useState('0');
          const [previous, setPrevious] = useState(null);
          const [operation, setOperation] = useState(null);
          const [fresh, setFresh] = useState(false);

          const calculate = (a, b, op) => {
            switch (op) {
              case '+': return a + b;
              case '-': return a - b;
              case '×': return a * b;
              case '÷': return a / b;
              default: return b;
            }
          };
          const inputNumber = (n) => {
            if (fresh) { setDisplay(String(n)); setFresh(false); }
            else setDisplay(display === '0' ? String(n) : display + n);
          };
          const inputOperation = (next) => {
            const value = parseFloat(display);
            if (previous === null) setPrevious(value);
            else if (operation) {
              const result = calculate(previous, value, operation);
              setDisplay(String(result));
              setPrevious(result);
            }
            setFresh(true);
            setOperation(next);
          };
          const clear = () => { setDisplay('0'); setPrevious(null); setOperation(null); setFresh(false); };

          return (
            <div className="min-h-screen bg-gradient-to-br from-gray-900 to-gray-800 flex items-center justify-center p-4">
              <div className="bg-white rounded-2xl shadow-2xl p-6 w-full max-w-md">
                <h1 className="text-2xl font-bold text-center text-gray-800 mb-2">__NAME__</h1>
                <div className="bg-gray-100 rounded-lg p-4 text-right mb-6">
                  <div className="text-3xl font-mono text-gray-800 break-all">{display}</div>
                </div>
                <div className="grid grid-cols-4 gap-3">
                  <button onClick={clear} className="col-span-2 h-16 rounded-lg bg-red-500 text-white">Clear</button>
                  {['÷', '×', '-', '+', '='].map(op => (
                    <button key={op} onClick={() => inputOperation(op)} className="h-16 rounded-lg bg-__COLOR__-500 text-white">{op}</button>
                  ))}
                  {[7, 8, 9, 4, 5, 6, 1, 2, 3, 0].map(n => (
                    <button key={n} onClick={() => inputNumber(n)} className="h-16 rounded-lg bg-gray-200 text-gray-800">{n}</button>
                  ))}
                </div>
              </div>
            </div>
          );
        }
"""

ECOMMERCE = """        function App() {
          const { user, login } = useAuth();
          const [products] = useState([
            { id: 1, name: 'Premium Headphones', price: 299, image: '🎧' },
            { id: 2, name: 'Smart Watch', price: 399, image: '⌚' },
            { id: 3, name: 'Wireless Speaker', price: 199, image: '🔊' },
            { id: 4, name: 'Gaming Mouse', price: 79, image: '🖱️' }
          ]);
          const [cart, setCart] = useState([]);

          return (
            <div className="min-h-screen bg-gray-50">
              <nav className="bg-white shadow-sm border-b px-8 h-16 flex justify-between items-center">
                <h1 className="text-xl font-bold text-__COLOR__-600">__NAME__</h1>
                <div className="flex items-center space-x-4">
                  <span className="text-2xl">🛒 {cart.length}</span>
                  __SIGN_IN__
                </div>
              </nav>
              <main className="max-w-7xl mx-auto px-8 py-8">
                <p className="text-gray-600 text-center mb-8">__DESCRIPTION__</p>
                <div className="grid grid-cols-1 md:grid-cols-2 lg:grid-cols-4 gap-6">
                  {products.map(product => (
                    <div key={product.id} className="bg-white rounded-lg shadow-md p-6 text-center">
                      <div className="text-6xl mb-4">{product.image}</div>
                      <h3 className="font-semibold text-lg mb-2">{product.name}</h3>
                      <p className="text-2xl font-bold text-__COLOR__-600 mb-4">${product.price}</p>
                      <button onClick={() => setCart(prev => [...prev, product])} className="w-full bg-__COLOR__-500 text-white py-2 rounded-lg">
                        Add to Cart
                      </button>
                    </div>
                  ))}
                </div>
              </main>
            </div>
          );
        }
"""

SOCIAL = """        function App() {
          const { user, login } = useAuth();
          const [posts, setPosts] = useState([
            { id: 1, author: 'Sarah Chen', content: 'Just shipped a new feature!', likes: 24 },
            { id: 2, author: 'Alex Rivera', content: 'Beautiful sunset today 🌅', likes: 56 }
          ]);
          const [draft, setDraft] = useState('');

          const publish = () => {
            if (!draft.trim()) return;
            setPosts(prev => [{ id: Date.now(), author: user ? user.name : 'You', content: draft, likes: 0 }, ...prev]);
            setDraft('');
          };

          return (
            <div className="min-h-screen bg-gray-100">
              <nav className="bg-white shadow-sm px-8 h-16 flex justify-between items-center">
                <h1 className="text-xl font-bold text-__COLOR__-600">__NAME__</h1>
                __SIGN_IN__
              </nav>
              <main className="max-w-2xl mx-auto py-8 space-y-6">
                <div className="bg-white rounded-lg shadow p-6">
                  <textarea value={draft} onChange={e => setDraft(e.target.value)} className="w-full border rounded-lg p-3" placeholder="What's on your mind?" />
                  <button onClick={publish} className="mt-3 bg-__COLOR__-500 text-white px-6 py-2 rounded-lg">Post</button>
                </div>
                {posts.map(post => (
                  <div key={post.id} className="bg-white rounded-lg shadow p-6">
                    <h3 className="font-semibold">{post.author}</h3>
                    <p className="mt-2">{post.content}</p>
                    <button className="mt-3 hover:text-__COLOR__-500">❤️ {post.likes}</button>
                  </div>
                ))}
              </main>
            </div>
          );
        }
"""

DASHBOARD = """        function App() {
          const { user, login, logout } = useAuth();
          const live = useRealTime();
          const stats = [
            { label: 'Total Users', value: '12,847', change: '+12%' },
            { label: 'Revenue', value: '$48,392', change: '+8%' },
            { label: 'Active Sessions', value: '1,429', change: '+23%' },
            { label: 'Conversion', value: '3.24%', change: '+2%' }
          ];

          if (!user) {
            return (
              <div className="min-h-screen gradient-bg flex items-center justify-center">
                <div className="bg-white rounded-2xl shadow-2xl p-8 w-full max-w-md">
                  <h2 className="text-2xl font-bold text-center mb-6">Admin Login</h2>
                  <button onClick={() => login('admin@app.com', 'password')} className="w-full bg-__COLOR__-500 text-white py-3 rounded-lg">
                    Sign In to Dashboard
                  </button>
                </div>
              </div>
            );
          }

          return (
            <div className="min-h-screen bg-gray-50">
              <header className="bg-white shadow-sm px-8 h-16 flex justify-between items-center">
                <h1 className="text-xl font-bold">__NAME__ Dashboard</h1>
                <button onClick={logout} className="text-sm text-gray-600">Logout</button>
              </header>
              <main className="max-w-7xl mx-auto px-8 py-8">
                <div className="grid grid-cols-1 md:grid-cols-4 gap-6 mb-8">
                  {stats.map(s => (
                    <div key={s.label} className="bg-white rounded-lg shadow p-6">
                      <p className="text-sm text-gray-600">{s.label}</p>
                      <p className="text-2xl font-bold">{s.value}</p>
                      <p className="text-sm text-green-600">{s.change}</p>
                    </div>
                  ))}
                </div>
                {live.length > 0 && (
                  <div className="bg-white rounded-lg shadow p-6">
                    <h3 className="text-lg font-semibold mb-4">Live Data</h3>
                    {live.map(point => (
                      <div key={point.id} className="flex justify-between py-1">
                        <span>{point.timestamp}</span>
                        <span className="font-mono text-__COLOR__-600">{point.value}</span>
                      </div>
                    ))}
                  </div>
                )}
              </main>
            </div>
          );
        }
"""

BLOG = """        function App() {
          const [posts] = useState([
            { id: 1, title: 'Getting Started', excerpt: 'Everything you need to know to begin.', date: 'Mar 12', readTime: '5 min' },
            { id: 2, title: 'Design Principles', excerpt: 'How we think about building products.', date: 'Mar 8', readTime: '7 min' },
            { id: 3, title: 'Behind the Scenes', excerpt: 'A look at our process.', date: 'Mar 1', readTime: '4 min' }
          ]);

          return (
            <div className="min-h-screen bg-gray-50">
              <header className="bg-white shadow-sm py-8 text-center">
                <h1 className="text-3xl font-bold text-__COLOR__-600">__NAME__</h1>
                <p className="text-gray-600 mt-2">__DESCRIPTION__</p>
              </header>
              <main className="max-w-4xl mx-auto px-8 py-12 space-y-8">
                {posts.map(post => (
                  <article key={post.id} className="bg-white rounded-lg shadow p-8">
                    <h2 className="text-2xl font-bold text-gray-900 mb-3 hover:text-__COLOR__-600">{post.title}</h2>
                    <p className="text-gray-600 mb-4">{post.excerpt}</p>
                    <div className="text-sm text-gray-500">{post.date} · {post.readTime} read</div>
                  </article>
                ))}
              </main>
            </div>
          );
        }
"""

PORTFOLIO = """        function App() {
          const [projects] = useState([
            { id: 1, title: 'Brand Identity', category: 'Design', emoji: '🎨' },
            { id: 2, title: 'Mobile Banking', category: 'Product', emoji: '📱' },
            { id: 3, title: 'Travel Journal', category: 'Web', emoji: '🗺️' }
          ]);

          return (
            <div className="min-h-screen bg-gray-900 text-white">
              <header className="py-20 text-center gradient-bg">
                <h1 className="text-5xl font-bold mb-4">__NAME__</h1>
                <p className="text-xl opacity-90 mb-8">__DESCRIPTION__</p>
                <button className="bg-__COLOR__-500 text-white px-8 py-3 rounded-lg">View Work</button>
              </header>
              <main className="max-w-6xl mx-auto px-8 py-16">
                <h2 className="text-3xl font-bold text-center mb-12">Featured Projects</h2>
                <div className="grid grid-cols-1 md:grid-cols-3 gap-8">
                  {projects.map(project => (
                    <div key={project.id} className="bg-gray-800 rounded-lg p-8 text-center">
                      <div className="text-6xl mb-4">{project.emoji}</div>
                      <h3 className="text-xl font-semibold mb-2">{project.title}</h3>
                      <p className="text-gray-400">{project.category}</p>
                    </div>
                  ))}
                </div>
              </main>
            </div>
          );
        }
"""

DEFAULT = """        function App() {
          const { user, login } = useAuth();
          const features = __FEATURES__;

          return (
            <div className="min-h-screen bg-gray-50">
              <header className="bg-white shadow-sm border-b px-8 h-16 flex justify-between items-center">
                <h1 className="text-xl font-bold text-__COLOR__-600">__NAME__</h1>
                __SIGN_IN__
              </header>
              <main className="max-w-7xl mx-auto px-8 py-12">
                <div className="text-center mb-12">
                  <h2 className="text-4xl font-bold mb-4">Welcome to __NAME__</h2>
                  <p className="text-xl text-gray-600">__DESCRIPTION__</p>
                </div>
                <div className="grid grid-cols-1 md:grid-cols-3 gap-6 mb-12">
                  {features.map((feature, index) => (
                    <div key={index} className="bg-white rounded-lg shadow p-6">
                      <h3 className="text-lg font-semibold mb-2">{feature}</h3>
                    </div>
                  ))}
                </div>
                <div className="bg-gradient-to-r from-__COLOR__-500 to-__COLOR__-600 rounded-lg p-8 text-white text-center">
                  <h3 className="text-2xl font-bold mb-2">🚀 AI-Generated Application</h3>
                  <p>Complexity: __COMPLEXITY__</p>
                </div>
              </main>
            </div>
          );
        }
"""
